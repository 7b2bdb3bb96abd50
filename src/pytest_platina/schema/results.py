"""Run result models.

Comparisons are values, never exceptions: the runner collects them per
case and aggregates them into a verify result or a change log, so a
single run reports every failing case at once.
"""

from pydantic import Field

from pytest_platina.errors import TestRunFailed
from pytest_platina.models import SchemaModel


class Comparison(SchemaModel):
    """Outcome of comparing a computed body with a stored one."""

    param: str = Field(
        title='Parameter name',
    )

    expected: str | None = Field(
        title='Stored body',
        description='Body recorded in the golden file, `None` if the parameter is absent.',
    )

    actual: str = Field(
        title='Computed body',
        description='Body computed by the callback.',
    )

    @property
    def matched(self) -> bool:
        """Whether the computed body equals the stored one."""
        return self.expected == self.actual


class CaseResult(SchemaModel):
    """Outcome of running the callback against a single case."""

    name: str = Field(
        title='Case name',
    )

    comparisons: tuple[Comparison, ...] = Field(
        default=(),
        title='Comparisons',
        description='Every comparison made by the callback, in call order.',
    )

    error: str | None = Field(
        default=None,
        title='Callback error',
        description='Representation of an exception escaping the callback.',
    )

    line_num: int | None = Field(
        default=None,
        description='Position of the case header in the source (0-based).',
    )

    @property
    def mismatches(self) -> tuple[Comparison, ...]:
        """Comparisons whose bodies differ."""
        return tuple(item for item in self.comparisons if not item.matched)

    @property
    def failed(self) -> bool:
        """Whether the case has a mismatch or an error."""
        return self.error is not None or bool(self.mismatches)


class Change(SchemaModel):
    """Parameter body rewritten by an update run."""

    case: str
    param: str
    expected: str | None
    actual: str


class ChangeLog(SchemaModel):
    """Changes applied by an update run, in file order.

    Cases whose callback raised keep their stored bodies; their results
    are carried in `errors` so the caller can fail after writing the
    changes of every other case.
    """

    changes: tuple[Change, ...] = ()
    errors: tuple[CaseResult, ...] = ()

    filename: str | None = Field(
        default=None,
        exclude=True,
    )

    def __len__(self) -> int:
        """Number of rewritten parameters."""
        return len(self.changes)

    def __bool__(self) -> bool:
        """Whether anything was rewritten."""
        return bool(self.changes)

    @property
    def cases(self) -> tuple[str, ...]:
        """Names of the changed cases without duplicates, in file order."""
        return tuple(dict.fromkeys(change.case for change in self.changes))

    @property
    def ok(self) -> bool:
        """Whether every callback completed."""
        return not self.errors

    def raise_for_errors(self) -> 'ChangeLog':
        """Raise if any callback raised.

        Returns:
            The change log itself when every callback completed.

        Raises:
            TestRunFailed: With a report of every failed case.
        """
        if self.errors:
            raise TestRunFailed(self.errors, filename=self.filename)

        return self

    @classmethod
    def from_results(cls, results: tuple[CaseResult, ...], *,
                     filename: str | None = None) -> 'ChangeLog':
        """Collect changes from case results.

        Repeated comparisons of one parameter collapse into a single
        change from the stored body to the last computed one; a
        parameter that ends up with its stored body is not a change.
        Cases whose callback raised contribute no changes.

        Args:
            results: Results of an update run.
            filename: Name of the golden file.

        Returns:
            A change log with an entry per rewritten parameter.
        """
        changes: dict[tuple[str, str], Change] = {}

        for result in results:
            if result.error is not None:
                continue
            for comparison in result.mismatches:
                key = (result.name, comparison.param)
                expected = changes[key].expected if key in changes else comparison.expected
                changes[key] = Change(
                    case=result.name,
                    param=comparison.param,
                    expected=expected,
                    actual=comparison.actual,
                )

        return cls(
            changes=tuple(
                change for change in changes.values()
                if change.expected != change.actual
            ),
            errors=tuple(result for result in results if result.error is not None),
            filename=filename,
        )


class VerifyResult(SchemaModel):
    """Outcome of a verify run."""

    passed: tuple[CaseResult, ...] = ()
    failed: tuple[CaseResult, ...] = ()

    filename: str | None = Field(
        default=None,
        exclude=True,
    )

    @property
    def ok(self) -> bool:
        """Whether every case passed."""
        return not self.failed

    @property
    def passed_cases(self) -> tuple[str, ...]:
        """Names of the passed cases."""
        return tuple(result.name for result in self.passed)

    @property
    def failed_cases(self) -> tuple[str, ...]:
        """Names of the failed cases."""
        return tuple(result.name for result in self.failed)

    def raise_for_failures(self) -> 'VerifyResult':
        """Raise if any case failed.

        Returns:
            The result itself when every case passed.

        Raises:
            TestRunFailed: With a report of every failed case.
        """
        if self.failed:
            raise TestRunFailed(self.failed, filename=self.filename)

        return self

    @classmethod
    def from_results(cls, results: tuple[CaseResult, ...], *,
                     filename: str | None = None) -> 'VerifyResult':
        """Split case results into passed and failed ones."""
        return cls(
            passed=tuple(result for result in results if not result.failed),
            failed=tuple(result for result in results if result.failed),
            filename=filename,
        )
