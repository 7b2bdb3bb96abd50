"""Mutable case handle exposed to test callbacks.

A `TestCase` wraps an immutable `Case` for the duration of a single
callback invocation. It serves parameter lookups, records comparisons,
and in update mode replaces parameters by position, so the runner can
rebuild an updated document once the callback returns.
"""

from logging import getLogger
from typing import TYPE_CHECKING

from pytest_platina.errors import ErrorContext, MalformedCase, ParamNotFound
from pytest_platina.grammar import contains_param_separator
from pytest_platina.schema import Case, CaseResult, Comparison, Parameter

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = getLogger(__name__)


class TestCase:
    """Handle to one case of a golden file.

    Handles are created by the runner, one per case, and passed to the
    test callback. A callback may look up and compare any number of
    parameters; all comparisons are kept until the case result is built.
    """

    __test__ = False

    def __init__(self, case: Case, *, update: bool = False,
                 filename: str | None = None) -> None:
        """Initialize a case handle.

        Args:
            case: Parsed case.
            update: Whether mismatching bodies replace the stored ones.
            filename: Name of the golden file, used in error messages.
        """
        self.case = case
        self.update = update
        self.filename = filename

        self._params: list[Parameter] = list(case.params)
        self._comparisons: list[Comparison] = []
        self._changed = False

    @property
    def name(self) -> str:
        """Name of the case."""
        return self.case.name

    @property
    def params(self) -> tuple[str, ...]:
        """Names of the parameters in file order."""
        return tuple(param.name for param in self._params)

    @property
    def comparisons(self) -> tuple[Comparison, ...]:
        """Comparisons recorded so far, in call order."""
        return tuple(self._comparisons)

    @property
    def mismatches(self) -> tuple[Comparison, ...]:
        """Recorded comparisons whose bodies differ."""
        return tuple(item for item in self._comparisons if not item.matched)

    @property
    def updated(self) -> bool:
        """Whether any stored body has been replaced."""
        return self._changed

    def __contains__(self, name: object) -> bool:
        return name in self.params

    def __iter__(self) -> 'Iterator[str]':
        return iter(self.params)

    def __repr__(self) -> str:
        return f'<TestCase {self.name!r}>'

    def get_param(self, name: str) -> str:
        """Return the body of a parameter.

        Args:
            name: Parameter name.

        Returns:
            The current body; in update mode this reflects earlier updates.

        Raises:
            ParamNotFound: If the case has no such parameter.
        """
        if (position := self._find(name)) is None:
            raise ParamNotFound(
                name,
                case=self.name,
                available=self.params,
                filename=self.filename,
                line_num=self.case.line_num,
            )

        return self._params[position].body

    def compare_and_update_param(self, name: str, actual: str) -> Comparison:
        """Compare a computed body with the stored one.

        Bodies are compared as exact strings. A mismatch is recorded in
        both modes; only in update mode is the stored body replaced.
        A parameter missing from the case is a mismatch with no expected
        body, and update mode appends it to the end of the case.

        Args:
            name: Parameter name.
            actual: Body computed by the callback.

        Returns:
            The recorded comparison.

        Raises:
            MalformedCase: In update mode, if the computed body contains
                a parameter separator line or ends with a carriage return
                and could not be read back unchanged.
        """
        position = self._find(name)
        expected = None if position is None else self._params[position].body

        comparison = Comparison(param=name, expected=expected, actual=actual)
        self._comparisons.append(comparison)

        if comparison.matched or not self.update:
            return comparison

        message = None
        if contains_param_separator(actual):
            message = 'Computed body contains a parameter separator line'
        elif actual.endswith('\r'):
            message = 'Computed body ends with a carriage return'

        if message is not None:
            raise MalformedCase(message, context=ErrorContext(
                filename=self.filename,
                line_num=self.case.line_num,
                case=self.name,
                param=name,
                element={'actual': actual},
            ))

        if position is None:
            self._params.append(Parameter(name=name, body=actual))
        else:
            self._params[position] = self._params[position].replace_body(actual)

        self._changed = True
        logger.info('updated parameter %r of case %r', name, self.name)

        return comparison

    def build(self) -> Case:
        """Build the case with every accepted update applied."""
        if not self._changed:
            return self.case

        return self.case.model_copy(update={'params': tuple(self._params)})

    def result(self, error: str | None = None) -> CaseResult:
        """Build the result of the case.

        Args:
            error: Representation of an exception escaping the callback.

        Returns:
            Result carrying every recorded comparison.
        """
        return CaseResult(
            name=self.name,
            comparisons=self.comparisons,
            error=error,
            line_num=self.case.line_num,
        )

    def _find(self, name: str) -> int | None:
        for position, param in enumerate(self._params):
            if param.name == name:
                return position

        return None
