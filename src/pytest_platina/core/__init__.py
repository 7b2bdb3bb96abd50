"""Core golden file engine.

This module defines the parsing, execution, and writing infrastructure
for golden files.

It provides:
- a lossless parser of golden file text into immutable documents;
- a runner invoking a test callback once per case, in file order;
- a writer reproducing untouched text and rewriting changed bodies.

The primary public entry points are `run`, which verifies a golden
file against a callback, and `run_and_update`, which returns the text
rewritten with computed outputs.
"""

from typing import TYPE_CHECKING

from pytest_platina.grammar import SEPARATOR_WIDTH

from .case import TestCase
from .parser import DocumentParser
from .runner import RunResult, Runner, Testable, Tester
from .writer import DocumentWriter

if TYPE_CHECKING:
    from pytest_platina.schema import ChangeLog, VerifyResult

__all__ = (
    'DocumentParser',
    'DocumentWriter',
    'RunResult',
    'Runner',
    'TestCase',
    'Testable',
    'Tester',
    'run',
    'run_and_update',
)


def run(content: str, tester: Tester, *,
        filename: str | None = None) -> 'VerifyResult':
    """Verify golden file text against a test callback.

    Args:
        content: Golden file text.
        tester: Test callback invoked once per case.
        filename: Optional name of the source used in reports.

    Returns:
        Passed and failed case results; nothing is modified.

    Raises:
        MalformedCase: If the text violates the golden file grammar.
            No callback is invoked in this case.
    """
    document = DocumentParser().parse(content, filename=filename)

    return Runner().run(document, tester).verify()


def run_and_update(content: str, tester: Tester, *,
                   filename: str | None = None,
                   separator_width: int = SEPARATOR_WIDTH) -> tuple[str, 'ChangeLog']:
    """Rewrite golden file text with the outputs of a test callback.

    Cases whose callback raised keep their stored bodies and are
    listed in `ChangeLog.errors`; every other case is updated.

    Args:
        content: Golden file text.
        tester: Test callback invoked once per case.
        filename: Optional name of the source used in reports.
        separator_width: Width of separators emitted for new parameters.

    Returns:
        The rewritten text and the log of changed parameters.

    Raises:
        MalformedCase: If the text violates the golden file grammar.
    """
    document = DocumentParser().parse(content, filename=filename)
    result = Runner(update=True).run(document, tester)
    changelog = result.changelog()

    return DocumentWriter(separator_width).render(result.document), changelog
