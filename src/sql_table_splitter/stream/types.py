"""Shared constants and statement type for stream splitting."""

from dataclasses import dataclass

# Statement terminator.
DELIMITER = b";"

# Lines starting with these markers (after trimming) carry no SQL.
COMMENT_PREFIXES = ("--", "/*")


@dataclass(frozen=True, slots=True)
class Statement:
    """One trimmed SQL statement, without its delimiter."""

    text: str
    terminated: bool = True

    def render(self) -> str:
        """Return the statement as written to output, re-terminated if needed."""
        if self.terminated:
            return self.text + DELIMITER.decode("ascii")
        return self.text
