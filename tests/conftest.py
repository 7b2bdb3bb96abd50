"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from pytest_platina.core import DocumentParser, DocumentWriter

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_platina.core import TestCase

LENGTH_CONTENT = '''\
[case1]
[input1]
a
----------
[input2]
b
----------
[output]
5
----------
==========
'''


@pytest.fixture
def parser() -> DocumentParser:
    """Provide a document parser with default settings."""
    return DocumentParser()


@pytest.fixture
def writer() -> DocumentWriter:
    """Provide a document writer with default settings."""
    return DocumentWriter()


@pytest.fixture
def length_content() -> str:
    """Provide a single-case golden file with a stale output.

    The case has two inputs, `a` and `b`, and records `5` as the output
    while the length tester computes `2`.
    """
    return LENGTH_CONTENT


@pytest.fixture
def length_tester() -> 'Callable[[TestCase], None]':
    """Provide a callback comparing the total length of two inputs."""
    def tester(case: 'TestCase') -> None:
        total = len(case.get_param('input1')) + len(case.get_param('input2'))
        case.compare_and_update_param('output', f'{total}')

    return tester


@pytest.fixture(autouse=True)
def clear_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from `PLATINA_*` variables of the outer environment."""
    for name in ('PLATINA_UPDATE', 'PLATINA_ENCODING', 'PLATINA_SEPARATOR_WIDTH'):
        monkeypatch.delenv(name, raising=False)
