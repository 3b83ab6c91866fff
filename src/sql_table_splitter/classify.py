"""Table-name classification for SQL statements."""

import re

# Destination for statements without a recognizable table.
FALLBACK_TABLE = "misc"

QUOTE_CHARS = "`\""

# Identifier, optionally wrapped in one pair of backticks or double quotes.
_IDENTIFIER = r"(?P<name>`[^`]+`|\"[^\"]+\"|[^\s(;`\"]+)"

# Checked in order; the first match wins.
_VERB_PATTERNS = (
    r"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?",
    r"INSERT\s+INTO\s+",
    r"UPDATE\s+",
    r"DELETE\s+FROM\s+",
    r"ALTER\s+TABLE\s+",
    r"DROP\s+TABLE\s+(?:IF\s+EXISTS\s+)?",
)

TABLE_PATTERNS = tuple(re.compile(r"\b" + verb + _IDENTIFIER) for verb in _VERB_PATTERNS)


def unquote(name: str) -> str:
    """Strip one layer of matching quote characters."""
    if len(name) >= 2 and name[0] == name[-1] and name[0] in QUOTE_CHARS:
        return name[1:-1]
    return name


def classify(statement: str) -> str:
    """
    Return the lowercase table name a statement targets, or the fallback bucket.

    Verbs are searched anywhere in the uppercased text, so a statement that
    still carries a leading comment is classified by the verb that follows it.
    """
    upper = statement.upper()
    for pattern in TABLE_PATTERNS:
        match = pattern.search(upper)
        if match:
            return unquote(match.group("name")).lower()
    return FALLBACK_TABLE
