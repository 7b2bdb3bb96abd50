"""Tests for golden file grammar primitives."""

import pydantic
import pytest

from pytest_platina.grammar import (
    contains_param_separator,
    is_case_separator,
    is_param_separator,
    looks_like_header,
    make_case_separator,
    make_param_separator,
    match_header,
    split_lines,
)
from pytest_platina.schema import Parameter


@pytest.mark.parametrize('line, expected', (
    pytest.param('[case1]\n', 'case1', id='simple'),
    pytest.param('[case 1]\n', 'case 1', id='inner space'),
    pytest.param('  [output]  \r\n', 'output', id='surrounding whitespace'),
    pytest.param('[x]', 'x', id='single char without eol'),
    pytest.param('[]\n', None, id='empty'),
    pytest.param('[ x]\n', None, id='leading space'),
    pytest.param('[x ]\n', None, id='trailing space'),
    pytest.param('[a]b]\n', None, id='inner bracket'),
    pytest.param('[a] [b]\n', None, id='two headers'),
    pytest.param('a\n', None, id='not bracketed'),
))
def test_match_header(line: str, expected: str | None) -> None:
    """Extract names from valid header lines only."""
    assert match_header(line) == expected


@pytest.mark.parametrize('line, expected', (
    pytest.param('[]\n', True, id='empty'),
    pytest.param('[a]b]\n', True, id='inner bracket'),
    pytest.param('text\n', False, id='text'),
))
def test_looks_like_header(line: str, expected: bool) -> None:
    """Tell bracketed lines from plain text."""
    assert looks_like_header(line) is expected


@pytest.mark.parametrize('line, case, param', (
    pytest.param('==========\n', True, False, id='case ten'),
    pytest.param('===========\n', True, False, id='case eleven'),
    pytest.param('  ==========  \r\n', True, False, id='case padded'),
    pytest.param('=========\n', False, False, id='case nine'),
    pytest.param('==========x\n', False, False, id='case suffixed'),
    pytest.param('----------\n', False, True, id='param ten'),
    pytest.param('--------------------', False, True, id='param twenty without eol'),
    pytest.param('---------\n', False, False, id='param nine'),
    pytest.param('-----=====-----\n', False, False, id='mixed'),
))
def test_separators(line: str, case: bool, param: bool) -> None:
    """Recognize separator lines of ten or more characters."""
    assert is_case_separator(line) is case
    assert is_param_separator(line) is param


def test_make_separators() -> None:
    """Emit separators no narrower than the grammar minimum."""
    assert make_case_separator() == '==========\n'
    assert make_param_separator(12) == '------------\n'
    assert make_param_separator(3) == '----------\n'


@pytest.mark.parametrize('text, expected', (
    pytest.param('', [], id='empty'),
    pytest.param('a', ['a'], id='no eol'),
    pytest.param('a\n\nb\n', ['a\n', '\n', 'b\n'], id='blank line'),
    pytest.param('a\r\nb', ['a\r\n', 'b'], id='crlf'),
    pytest.param('a\x0cb\n', ['a\x0cb\n'], id='form feed kept'),
))
def test_split_lines(text: str, expected: list[str]) -> None:
    """Split on line feeds only, keeping terminators."""
    assert split_lines(text) == expected


def test_contains_param_separator() -> None:
    """Detect bodies that would end early when written."""
    assert contains_param_separator('a\n----------\nb')
    assert not contains_param_separator('a\n==========\nb')


@pytest.mark.parametrize('name', (
    pytest.param('', id='empty'),
    pytest.param(' x', id='leading space'),
    pytest.param('a]', id='bracket'),
    pytest.param('a\nb', id='line break'),
))
def test_invalid_model_name(name: str) -> None:
    """Reject names that could not be written as headers."""
    with pytest.raises(pydantic.ValidationError, match=r'^1 validation error'):
        Parameter(name=name)
