"""Tests for the statement splitter."""

import pytest

from sql_table_splitter.stream import (
    Statement,
    StatementSplitter,
    is_valid_statement,
    split_statements,
)

SAMPLE_SQL = (
    "-- MySQL dump\n"
    "/*!40101 SET NAMES utf8 */;\n"
    "DROP TABLE IF EXISTS `users`;\n"
    "CREATE TABLE `users` (\n"
    "  `id` int NOT NULL,\n"
    "  `name` varchar(64)\n"
    ");\n"
    "INSERT INTO `users` VALUES (1,'Ana'),(2,'Bo');\n"
    "\n"
    "   \n"
    ";\n"
    "UPDATE `users` SET `name` = 'Zoë' WHERE `id` = 2;\n"
    "-- trailing comment\n"
    "DELETE FROM `users` WHERE `id` = 1"
).encode("utf-8")


def _chunked(data: bytes, size: int) -> list[bytes]:
    return [data[i : i + size] for i in range(0, len(data), size)]


def _naive_split(text: str) -> list[str]:
    """Split a whole document at once and filter with the same validity rule."""
    pieces = text.split(";")
    rendered = [p.strip() + ";" for p in pieces[:-1] if is_valid_statement(p.strip())]
    last = pieces[-1].strip()
    if is_valid_statement(last):
        rendered.append(last)
    return rendered


class TestIsValidStatement:
    """Test cases for is_valid_statement."""

    def test_comment_only_is_invalid(self) -> None:
        assert not is_valid_statement("-- comment\n")
        assert not is_valid_statement("/* block */")
        assert not is_valid_statement("-- one\n  -- two\n/*!40101 SET NAMES utf8 */")

    def test_blank_is_invalid(self) -> None:
        assert not is_valid_statement("")
        assert not is_valid_statement("   \n\t\n")

    def test_statement_after_comment_is_valid(self) -> None:
        assert is_valid_statement("-- header\nINSERT INTO t VALUES (1)")

    def test_plain_statement_is_valid(self) -> None:
        assert is_valid_statement("SELECT 1")


class TestStatementSplitter:
    """Test cases for StatementSplitter."""

    def test_emits_complete_statements_and_keeps_carry(self) -> None:
        """Test that only delimiter-terminated pieces are emitted from a chunk."""
        splitter = StatementSplitter()

        statements = splitter.feed(b"INSERT INTO t VALUES (1); INSERT INTO")

        assert statements == [Statement("INSERT INTO t VALUES (1)")]
        assert splitter.carry == " INSERT INTO"

    def test_carry_completes_on_next_chunk(self) -> None:
        """Test that a statement straddling two chunks is emitted once, whole."""
        splitter = StatementSplitter()

        assert splitter.feed(b"INSERT INTO t VAL") == []
        statements = splitter.feed(b"UES (2);\n")

        assert statements == [Statement("INSERT INTO t VALUES (2)")]
        assert splitter.carry == "\n"

    def test_finish_emits_unterminated_tail(self) -> None:
        """Test that the final fragment is emitted without a delimiter."""
        splitter = StatementSplitter()
        splitter.feed(b"INSERT INTO t VALUES (1);\nINSERT INTO t VALUES (2)\n")

        statements = splitter.finish()

        assert statements == [Statement("INSERT INTO t VALUES (2)", terminated=False)]
        assert statements[0].render() == "INSERT INTO t VALUES (2)"
        assert splitter.carry == ""

    def test_finish_drops_invalid_tail(self) -> None:
        splitter = StatementSplitter()
        splitter.feed(b"INSERT INTO t VALUES (1);\n-- done\n")

        assert splitter.finish() == []

    def test_finish_on_empty_input(self) -> None:
        assert StatementSplitter().finish() == []

    def test_statement_is_trimmed_and_reterminated(self) -> None:
        """Test that surrounding whitespace is trimmed before re-terminating."""
        statements = list(split_statements([b"  INSERT INTO t VALUES (1);  "]))

        assert [s.render() for s in statements] == ["INSERT INTO t VALUES (1);"]

    def test_drops_comment_only_and_blank_pieces(self) -> None:
        """Test that comment-only and whitespace-only pieces are dropped."""
        data = b"-- comment\n;   \n;INSERT INTO t VALUES (1);\n\n;"

        statements = list(split_statements([data]))

        assert statements == [Statement("INSERT INTO t VALUES (1)")]

    def test_does_not_rescan_pending_bytes(self) -> None:
        """Test that the scan cursor moves past bytes already searched."""
        splitter = StatementSplitter()

        splitter.feed(b"INSERT INTO t ")
        assert splitter._scan_from == len(b"INSERT INTO t ")

        splitter.feed(b"VALUES (1)")
        assert splitter._scan_from == len(b"INSERT INTO t VALUES (1)")

        assert splitter.feed(b";") == [Statement("INSERT INTO t VALUES (1)")]
        assert splitter._scan_from == 0

    def test_multibyte_character_split_across_chunks(self) -> None:
        """Test that UTF-8 sequences cut by a chunk boundary decode intact."""
        data = "INSERT INTO t VALUES ('héllo wörld');".encode()

        statements = list(split_statements(_chunked(data, 1)))

        assert statements == [Statement("INSERT INTO t VALUES ('héllo wörld')")]

    def test_undecodable_bytes_survive(self) -> None:
        """Test that invalid UTF-8 round-trips back to the input bytes."""
        data = b"INSERT INTO t VALUES ('\xff\xfe');"

        (statement,) = split_statements([data])

        assert statement.render().encode("utf-8", "surrogateescape") == data

    def test_delimiter_inside_string_literal_splits(self) -> None:
        """Test that quoted semicolons are treated as terminators."""
        statements = list(split_statements([b"INSERT INTO t VALUES ('a;b');"]))

        assert [s.text for s in statements] == ["INSERT INTO t VALUES ('a", "b')"]

    def test_rejects_non_ascii_compatible_encoding(self) -> None:
        with pytest.raises(ValueError, match="ASCII-compatible"):
            StatementSplitter("utf-16")

    @pytest.mark.parametrize("encoding", ["iso2022_jp", "ISO-2022-KR", "hz", "utf-7"])
    def test_rejects_stateful_encoding(self, encoding: str) -> None:
        """Test that shift-state codecs, whose characters can contain 0x3B, are refused."""
        with pytest.raises(ValueError, match="stateful"):
            StatementSplitter(encoding)

    def test_stateful_encoding_would_cut_characters(self) -> None:
        data = "INSERT INTO t VALUES ('\u58eb');".encode("iso2022_jp")

        assert data.count(b";") == 2
        with pytest.raises(ValueError, match="stateful"):
            list(split_statements([data], encoding="iso2022_jp"))

    def test_rejects_unknown_encoding(self) -> None:
        with pytest.raises(ValueError, match="unknown encoding"):
            StatementSplitter("no-such-codec")

    def test_latin1_encoding(self) -> None:
        data = "INSERT INTO t VALUES ('café');".encode("latin-1")

        (statement,) = split_statements([data], encoding="latin-1")

        assert statement.text == "INSERT INTO t VALUES ('café')"


class TestChunkBoundaryInvariance:
    """Splitting must not depend on how the input is chunked."""

    @pytest.mark.parametrize("chunk_size", [1, 7, 4096, len(SAMPLE_SQL)])
    def test_same_statements_for_any_chunk_size(self, chunk_size: int) -> None:
        whole = list(split_statements([SAMPLE_SQL]))

        chunked = list(split_statements(_chunked(SAMPLE_SQL, chunk_size)))

        assert chunked == whole

    def test_matches_naive_whole_file_split(self) -> None:
        """Test no loss and no duplication against a one-shot split."""
        rendered = [s.render() for s in split_statements(_chunked(SAMPLE_SQL, 7))]

        assert rendered == _naive_split(SAMPLE_SQL.decode("utf-8"))

    def test_sample_statement_order(self) -> None:
        texts = [s.text.split("\n")[0] for s in split_statements([SAMPLE_SQL])]

        assert texts == [
            "DROP TABLE IF EXISTS `users`",
            "CREATE TABLE `users` (",
            "INSERT INTO `users` VALUES (1,'Ana'),(2,'Bo')",
            "UPDATE `users` SET `name` = 'Zoë' WHERE `id` = 2",
            "-- trailing comment",
        ]
