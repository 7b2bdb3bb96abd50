"""Golden file grammar primitives.

This module defines the delimiter lines and header syntax shared by the
document parser and the document writer.

A golden file is a sequence of cases. Each case starts with a bracketed
header carrying the case name, followed by parameters (a bracketed
header, a raw body and a parameter separator line), and ends with
a case separator line::

    [case_name]
    [param]
    <raw body>
    ----------
    ==========

Only header lines and separator lines are structural; everything between
a parameter header and its separator is kept verbatim.
"""

from re import compile as regexp
from typing import Annotated

from pydantic import Field

#: Minimal number of repeated characters in a separator line.
SEPARATOR_WIDTH = 10

#: Character repeated in a case separator line.
CASE_SEPARATOR_CHAR = '='

#: Character repeated in a parameter separator line.
PARAM_SEPARATOR_CHAR = '-'

#: Base pattern for case and parameter names.
#: Names are non-empty, have no brackets and no surrounding whitespace.
_NAME_PATTERN = r'[^\[\]\s](?:[^\[\]\r\n]*[^\[\]\s])?'

#: Compiled pattern for a header line (surrounding whitespace is ignored).
HEADER_PATTERN = regexp(rf'^\s*\[(?P<name>{_NAME_PATTERN})\]\s*$')

#: Compiled pattern for a line that looks like a header but has an invalid name.
RAW_HEADER_PATTERN = regexp(r'^\s*\[.*\]\s*$')

#: Compiled pattern for a case separator line.
CASE_SEPARATOR_PATTERN = regexp(rf'^\s*{CASE_SEPARATOR_CHAR}{{{SEPARATOR_WIDTH},}}\s*$')

#: Compiled pattern for a parameter separator line.
PARAM_SEPARATOR_PATTERN = regexp(rf'^\s*{PARAM_SEPARATOR_CHAR}{{{SEPARATOR_WIDTH},}}\s*$')

#: Compiled pattern for splitting text into lines, keeping terminators.
LINE_PATTERN = regexp(r'[^\n]*\n|[^\n]+$')

#: Compiled pattern for the final line terminator of a body.
EOL_PATTERN = regexp(r'\r?\n\Z')


Name = Annotated[
    str, Field(
        pattern=rf'^{_NAME_PATTERN}$',
        title='Case or parameter name',
        description=(
            'Name written between square brackets on a header line. '
            'A name must not be empty, must not contain square brackets '
            'or line breaks, and must not start or end with whitespace.'
        ),
        examples=[
            'case1',
            'expected_output',
            'empty input',
        ],
    ),
]


def is_blank(line: str) -> bool:
    """Check whether a line holds only whitespace."""
    return not line.strip()


def is_case_separator(line: str) -> bool:
    """Check whether a line is a case separator."""
    return CASE_SEPARATOR_PATTERN.match(line) is not None


def is_param_separator(line: str) -> bool:
    """Check whether a line is a parameter separator."""
    return PARAM_SEPARATOR_PATTERN.match(line) is not None


def match_header(line: str) -> str | None:
    """Extract a name from a header line.

    Args:
        line: Raw line, with or without a line terminator.

    Returns:
        The bracketed name, or `None` if the line is not a valid header.
    """
    if match := HEADER_PATTERN.match(line):
        return match.group('name')

    return None


def looks_like_header(line: str) -> bool:
    """Check whether a line is bracketed, regardless of the name validity."""
    return RAW_HEADER_PATTERN.match(line) is not None


def make_header(name: str) -> str:
    """Render a header line with a trailing line terminator."""
    return f'[{name}]\n'


def make_case_separator(width: int = SEPARATOR_WIDTH) -> str:
    """Render a case separator line with a trailing line terminator."""
    return f'{CASE_SEPARATOR_CHAR * max(width, SEPARATOR_WIDTH)}\n'


def make_param_separator(width: int = SEPARATOR_WIDTH) -> str:
    """Render a parameter separator line with a trailing line terminator."""
    return f'{PARAM_SEPARATOR_CHAR * max(width, SEPARATOR_WIDTH)}\n'


def split_lines(text: str) -> list[str]:
    """Split text into lines keeping `\\n` terminators.

    Unlike `str.splitlines`, only `\\n` is treated as a line boundary,
    so form feeds and other separators stay inside body content.
    """
    return LINE_PATTERN.findall(text)


def contains_param_separator(body: str) -> bool:
    """Check whether a body has a line that would terminate it early."""
    return any(is_param_separator(line) for line in split_lines(body))
