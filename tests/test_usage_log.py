"""Tests for usage log parsing."""

from classprune.usage_log import (
    LINE_SEPARATOR as SEP,
    ParserState,
    UsageLogParser,
    parse_usage_text,
    tokenize_usage_line,
    tokenize_usage_text,
)


class TestUsageLogParser:
    """Tests for the token state machine."""

    def test_reference_sequence(self) -> None:
        """Only names standing alone on a line should be confirmed."""
        tokens = [SEP, "a.B", SEP, "x", "y", SEP, "c.D", SEP]

        assert UsageLogParser().feed(tokens) == {"a.B", "c.D"}

    def test_starts_idle(self) -> None:
        """The first token of the stream can be a class name."""
        assert UsageLogParser().feed(["a.B", SEP]) == {"a.B"}

    def test_unterminated_candidate(self) -> None:
        """A name without a closing separator is not confirmed."""
        parser = UsageLogParser()
        parser.feed([SEP, "a.B"])

        assert parser.removed == set()
        assert parser.state is ParserState.EXPECTING

    def test_empty_lines(self) -> None:
        """Consecutive separators should not produce candidates."""
        assert UsageLogParser().feed([SEP, SEP, SEP]) == set()

    def test_duplicates(self) -> None:
        """A class reported twice should appear once."""
        assert UsageLogParser().feed(["a.B", SEP, "a.B", SEP]) == {"a.B"}

    def test_skips_rest_of_rejected_line(self) -> None:
        """After a rejected line, tokens wait for the next separator."""
        parser = UsageLogParser()
        parser.feed(["x", "y", "z"])

        assert parser.state is ParserState.SKIPPING
        parser.feed([SEP, "a.B", SEP])
        assert parser.removed == {"a.B"}

    def test_partially_used_class(self) -> None:
        """A class followed by ':' and members should not be reported."""
        tokens = ["a.Partial", ":", SEP, "    ", "void unused()", SEP]

        assert UsageLogParser().feed(tokens) == set()

    def test_shared_removed_set(self) -> None:
        """Confirmed names go into the set passed in."""
        removed = {"existing.Name"}
        UsageLogParser(removed).feed(["a.B", SEP])

        assert removed == {"existing.Name", "a.B"}

    def test_interleaved_free_text_is_indistinguishable(self) -> None:
        """A free text line on its own is taken for a class name."""
        tokens = ["Some diagnostic", SEP, "a.B", SEP]

        assert UsageLogParser().feed(tokens) == {"Some diagnostic", "a.B"}

    def test_class_sharing_line_with_text_is_dropped(self) -> None:
        """A class name followed by more text on its line is lost."""
        tokens = ["a.B", " (removed)", SEP]

        assert UsageLogParser().feed(tokens) == set()


class TestTokenize:
    """Tests for splitting printed usage logs into tokens."""

    def test_class_line(self) -> None:
        assert tokenize_usage_line("com.a.B") == ["com.a.B"]

    def test_partial_class_line(self) -> None:
        assert tokenize_usage_line("com.a.C:") == ["com.a.C", ":"]

    def test_member_line(self) -> None:
        assert tokenize_usage_line("    public void run()") == ["    ", "public void run()"]

    def test_blank_line(self) -> None:
        assert tokenize_usage_line("   ") == []

    def test_text(self) -> None:
        text = "com.a.B\ncom.a.C:\n    int unused\n"

        assert list(tokenize_usage_text(text)) == [
            "com.a.B", SEP,
            "com.a.C", ":", SEP,
            "    ", "int unused", SEP,
        ]


class TestParseUsageText:
    """Tests for parse_usage_text."""

    def test_printed_usage(self) -> None:
        """Should report fully removed classes only."""
        text = (
            "com.example.dep.Unused\n"
            "com.example.dep.Partial:\n"
            "    public void unusedMethod()\n"
            "    java.lang.String unusedField\n"
            "com.example.dep.Unused$Inner\n"
        )

        assert parse_usage_text(text) == {
            "com.example.dep.Unused",
            "com.example.dep.Unused$Inner",
        }

    def test_windows_line_endings(self) -> None:
        assert parse_usage_text("a.B\r\nc.D\r\n") == {"a.B", "c.D"}

    def test_empty(self) -> None:
        assert parse_usage_text("") == set()
