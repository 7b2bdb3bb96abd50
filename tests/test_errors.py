"""Tests for error formatting and run failure reports."""

import pytest

from pytest_platina.errors import (
    ErrorContext,
    ErrorFormatter,
    MalformedCase,
    ParamNotFound,
    PlatinaError,
    TestRunFailed,
)
from pytest_platina.schema import CaseResult, Comparison

TEST_FAILED_RESULTS = (
    CaseResult(
        name='case1',
        comparisons=(
            Comparison(param='input', expected='a', actual='a'),
            Comparison(param='output', expected='5', actual='2'),
        ),
        line_num=0,
    ),
    CaseResult(
        name='case2',
        comparisons=(
            Comparison(param='output', expected='one\ntwo', actual='one\nthree'),
        ),
        line_num=12,
    ),
    CaseResult(
        name='case3',
        error="ValueError('boom')",
        line_num=20,
    ),
)


def test_format_without_context() -> None:
    """Return a bare message when there is no context."""
    assert ErrorFormatter.format('Failure') == 'Failure'
    assert str(PlatinaError('Failure')) == 'Failure'


@pytest.mark.parametrize('context, expected', (
    pytest.param(
        ErrorContext(filename='golden.txt', line_num=2),
        '  in "golden.txt", line 3\n',
        id='file and line',
    ),
    pytest.param(
        ErrorContext(line_num=0),
        '  in "<unicode string>", line 1\n',
        id='unknown file',
    ),
    pytest.param(
        ErrorContext(filename='golden.txt', case='c'),
        '  in "golden.txt"\n  on case \'c\'\n',
        id='case without line',
    ),
    pytest.param(
        ErrorContext(filename='golden.txt', line_num=0, case='c', param='p'),
        '  in "golden.txt", line 1\n  on case \'c\', parameter \'p\'\n',
        id='case and parameter',
    ),
))
def test_location_string(context: ErrorContext, expected: str) -> None:
    """Render file, line, case, and parameter locations."""
    assert ErrorFormatter.get_location_string(context, indent=2) == expected


def test_snippet_string() -> None:
    """Render snippets as indented YAML with multi-line literal blocks."""
    snippet = ErrorFormatter.get_snippet_string(
        ErrorContext(element={'line': '[]', 'body': 'a\nb'}),
        indent=2,
    )

    assert snippet == (
        '   ...\n'
        "  line: '[]'\n"
        '  body: |-\n'
        '    a\n'
        '    b\n'
    )


def test_malformed_case_message() -> None:
    """Point at the offending line of a golden file."""
    error = MalformedCase.from_line(
        'Case must be in form [name]',
        'case3\r\n',
        line_num=9,
        filename='golden.txt',
        case='case2',
    )

    assert error.context['element'] == {'line': 'case3'}
    assert str(error) == (
        'Case must be in form [name]\n'
        '    in "golden.txt", line 10\n'
        "    on case 'case2'\n"
        '         ...\n'
        '        line: case3\n'
    )


def test_error_types() -> None:
    """Keep errors catchable by their natural builtin types."""
    assert issubclass(MalformedCase, PlatinaError)
    assert issubclass(ParamNotFound, KeyError)
    assert issubclass(TestRunFailed, AssertionError)

    with pytest.raises(KeyError):
        raise ParamNotFound('p', case='c')


def test_run_failed_report() -> None:
    """List every failed case with its mismatches and errors."""
    error = TestRunFailed(TEST_FAILED_RESULTS, filename='golden.txt')
    report = str(error)

    assert error.case_names == ('case1', 'case2', 'case3')
    assert report.startswith('3 golden case(s) failed\n')

    assert 'Case failed: case1\n    in "golden.txt", line 1\n' in report
    assert 'parameter mismatch: output\n' in report
    assert "expected: '5'\n" in report
    assert "actual: '2'\n" in report
    assert 'parameter mismatch: input' not in report

    assert 'Case failed: case2\n    in "golden.txt", line 13\n' in report
    assert 'expected: |-\n          one\n          two\n' in report

    assert 'Case failed: case3\n    in "golden.txt", line 21\n' in report
    assert "    error: ValueError('boom')\n" in report


def test_run_failed_missing_expected() -> None:
    """Show an absent parameter as a null expected body."""
    error = TestRunFailed((
        CaseResult(name='c', comparisons=(Comparison(param='out', expected=None, actual='x'),)),
    ))

    assert 'expected: null\n' in str(error)
