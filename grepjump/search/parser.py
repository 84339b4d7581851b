"""
Line Parser - PATH:LINE:CONTENT output lines to structured matches.

The first ":<digits>:" run in the line separates the path from the line
number; everything after it is content, colons included. A path may
start with a drive letter ("C:src/x.c:7:..."), which stays in the path.
"""

import re
from dataclasses import dataclass
from typing import Optional

LINE_PATTERN = re.compile(r"((?:[A-Za-z]:)?.*?):([0-9]+):(.*)")


@dataclass(frozen=True)
class ParsedMatch:
    """One search hit."""
    file_path: str
    line_number: int
    content: str

    def __str__(self):
        return f"{self.file_path}:{self.line_number}:{self.content}"


def parse_line(line: str) -> Optional[ParsedMatch]:
    """
    Parse one backend output line.

    Returns:
        ParsedMatch, or None when the line is not PATH:LINE:CONTENT
        (binary file notices, warnings, blank lines)
    """
    m = LINE_PATTERN.fullmatch(line)
    if m is None or not m.group(1):
        return None
    return ParsedMatch(m.group(1), int(m.group(2)), m.group(3))


def format_candidate(line: str) -> Optional[str]:
    """
    Per-line formatter handed to the presenter.

    Non-matching lines come back as None and must be left out of the
    candidate list. Highlighting is up to the presenter.
    """
    match = parse_line(line)
    if match is None:
        return None
    return str(match)
