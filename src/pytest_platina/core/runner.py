"""Sequential execution of test callbacks against golden documents.

This module defines the runner driving a caller-supplied callback over
every case of a document, in file order, and aggregating the outcome
into a verify result or a change log.
"""

from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pytest_platina.schema import ChangeLog, VerifyResult

from .case import TestCase

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_platina.schema import CaseResult, Document

logger = getLogger(__name__)


@runtime_checkable
class Testable(Protocol):
    """Object that can be run against golden cases."""

    def run_testcase(self, case: TestCase) -> None:
        """Run the test logic against a single case."""
        ...  # pragma: no cover


#: A test callback: a `Testable` object or a plain callable taking a case.
type Tester = Testable | Callable[[TestCase], object]


class RunResult:
    """Outcome of running a callback over a whole document.

    Holds the per-case results in file order and, for update runs,
    the document with every accepted update applied.
    """

    def __init__(self, document: 'Document', results: tuple['CaseResult', ...],
                 *, update: bool = False) -> None:
        """Initialize a run result.

        Args:
            document: Resulting document (updated one in update mode).
            results: Case results in file order.
            update: Whether the run was an update run.
        """
        self.document = document
        self.results = results
        self.update = update

    @property
    def failed(self) -> tuple['CaseResult', ...]:
        """Results of the cases with a mismatch or an error."""
        return tuple(result for result in self.results if result.failed)

    @property
    def errors(self) -> tuple['CaseResult', ...]:
        """Results of the cases whose callback raised."""
        return tuple(result for result in self.results if result.error is not None)

    def verify(self) -> VerifyResult:
        """Summarize the run as a verify result."""
        return VerifyResult.from_results(self.results, filename=self.document.filename)

    def changelog(self) -> ChangeLog:
        """Summarize the run as a change log.

        Results of the cases whose callback raised are carried in
        `ChangeLog.errors`; their bodies are left as stored.
        """
        return ChangeLog.from_results(self.results, filename=self.document.filename)


class Runner:
    """Runner of test callbacks over golden documents.

    Cases are executed strictly sequentially: the callback for one case
    returns before the next case starts. A failing case never stops
    the run, so every failure is reported at once.
    """

    def __init__(self, *, update: bool = False) -> None:
        """Initialize a runner.

        Args:
            update: Whether mismatching bodies replace the stored ones.
        """
        self.update = update

    def run_case(self, handle: TestCase, tester: 'Tester') -> 'CaseResult':
        """Invoke the callback against a single case.

        Exceptions escaping the callback are recorded as the case error.

        Args:
            handle: Case handle passed to the callback.
            tester: Test callback.

        Returns:
            Result of the case.
        """
        executor = tester.run_testcase if isinstance(tester, Testable) else tester

        logger.debug('running case %r', handle.name)
        try:
            executor(handle)

        except Exception as base:  # noqa: BLE001
            logger.warning('case %r raised %r', handle.name, base)
            return handle.result(error=f'{base!r}')

        return handle.result()

    def run(self, document: 'Document', tester: 'Tester') -> RunResult:
        """Run the callback over every case of a document.

        A case whose callback raised keeps its stored bodies, even if
        the callback accepted updates before raising.

        Args:
            document: Parsed golden document.
            tester: Test callback.

        Returns:
            Per-case results and the resulting document.
        """
        results = []
        cases = []

        for case in document.cases:
            handle = TestCase(case, update=self.update, filename=document.filename)
            result = self.run_case(handle, tester)
            results.append(result)
            cases.append(case if result.error is not None else handle.build())

        if self.update:
            document = document.model_copy(update={'cases': tuple(cases)})

        return RunResult(document, tuple(results), update=self.update)
