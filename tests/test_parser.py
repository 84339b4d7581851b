"""
Tests for the PATH:LINE:CONTENT line parser.
"""

import pytest

from grepjump.search.parser import ParsedMatch, format_candidate, parse_line


class TestParseLine:
    """Test the line grammar."""

    def test_basic_line(self):
        assert parse_line("src/main.go:42:foo bar:baz") == ParsedMatch("src/main.go", 42, "foo bar:baz")

    def test_non_matching_line(self):
        assert parse_line("this line has no colon-number pattern") is None

    def test_drive_letter_kept_in_path(self):
        match = parse_line("C:src/file.c:7:value")
        assert match.file_path == "C:src/file.c"
        assert match.line_number == 7
        assert match.content == "value"

    def test_first_number_boundary_wins(self):
        """Content that looks like another match is not re-parsed."""
        match = parse_line("a.py:3:see b.py:10:other")
        assert match == ParsedMatch("a.py", 3, "see b.py:10:other")

    def test_colons_in_path_before_boundary(self):
        match = parse_line("dir:name/x.txt:5:hello")
        assert match.file_path == "dir:name/x.txt"
        assert match.line_number == 5

    def test_empty_content(self):
        assert parse_line("a.py:1:") == ParsedMatch("a.py", 1, "")

    @pytest.mark.parametrize("line", [
        "",
        "Binary file foo.bin matches",
        "a.py:12",
        "a.py:x1:content",
        ":12:no path",
    ])
    def test_rejects(self, line):
        assert parse_line(line) is None

    def test_multi_digit_line_number(self):
        assert parse_line("big.c:123456:x").line_number == 123456


class TestFormatCandidate:

    def test_match_formats_as_grep_line(self):
        assert format_candidate("src/a.py:4:  return x") == "src/a.py:4:  return x"

    def test_non_match_is_excluded(self):
        assert format_candidate("warning: something") is None

    def test_str_of_match(self):
        assert str(ParsedMatch("a", 1, "b:c")) == "a:1:b:c"
