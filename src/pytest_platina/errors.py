"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report malformed golden files, missing parameters, and failed test
runs in a structured way, together with a formatter that renders source
locations and YAML snippets of the offending content.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import SafeDumper, dump

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Self

if TYPE_CHECKING:
    from yaml.nodes import ScalarNode

if TYPE_CHECKING:
    from pytest_platina.schema.results import CaseResult

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the golden file where the error occurred.
    filename: str | None

    #: Line number in the golden file (0-based).
    line_num: int | None

    #: Name of the case being parsed or executed.
    case: str | None
    #: Name of the parameter involved.
    param: str | None

    #: Underlying exception that triggered formatting.
    error: Exception | None

    #: Data rendered as a YAML snippet below the location.
    element: Any


class _SnippetDumper(SafeDumper):
    """YAML dumper rendering multi-line strings as literal blocks."""


def _represent_str(dumper: SafeDumper, value: str) -> 'ScalarNode':
    """Represent a string, using the literal block style for multi-line text."""
    if '\n' in value:
        return dumper.represent_scalar('tag:yaml.org,2002:str', value, style='|')

    return dumper.represent_scalar('tag:yaml.org,2002:str', value)


_SnippetDumper.add_representer(str, _represent_str)


class ErrorFormatter:
    """Utility class for formatting golden file errors.

    This formatter is responsible for producing human-readable
    error messages with optional source location and YAML-based
    contextual snippets.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source and case location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename, line,
            case, and parameter names when available.
        """
        indent = cls._ensure_indent(indent)

        filename = context.get('filename')
        if not filename:
            filename = FORMAT_FILENAME

        message = f'{indent}in "{filename}"'
        if (line_num := context.get('line_num')) is not None:
            message += f', line {line_num + 1}'
        message += linesep

        if (case := context.get('case')) is not None:
            message += f'{indent}on case {case!r}'
            if (param := context.get('param')) is not None:
                message += f', parameter {param!r}'
            message += linesep

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the error context.

        Args:
            context: Error context containing snippet data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if (element := context.get('element')) is None:
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml(element, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to a YAML-formatted string.

        Args:
            value: Plain data to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = dump(
            value,
            Dumper=_SnippetDumper,
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Args:
            value: Original multi-line string.
            indent: Indentation prefix.

        Returns:
            Indented string.
        """
        if not indent:
            return value.rstrip(linesep)

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input.

        Args:
            indent: Indentation as string or number of spaces.

        Returns:
            A string consisting of spaces or the provided string.
        """
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class PlatinaWarning(UserWarning):
    """Base warning for non-fatal golden file issues."""


class GoldenUpdateWarning(PlatinaWarning):
    """Warning emitted when a golden file has been rewritten.

    Update runs always pass, so the warning keeps rewritten files
    visible in the pytest summary.
    """


class PlatinaError(Exception, ErrorFormatter):
    """Base exception for all pytest-platina errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context with location and snippet data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """Render the message with its context."""
        return self.format(self.message, self.context)


class MalformedCase(PlatinaError):
    """Error raised when a golden file violates the grammar.

    Parsing is atomic: this error is raised before any case is executed
    and no partially parsed document is returned.
    """

    @classmethod
    def from_line(cls, message: str, line: str, *,
                  line_num: int | None = None,
                  filename: str | None = None,
                  case: str | None = None) -> 'Self':
        """Create an error pointing at a source line.

        Args:
            message: Human-readable error message.
            line: Offending raw line.
            line_num: Position of the line in the file (0-based).
            filename: Name of the golden file.
            case: Name of the enclosing case, if already known.

        Returns:
            An initialized MalformedCase instance with location context.
        """
        error_context = ErrorContext(
            filename=filename,
            line_num=line_num,
            case=case,
            element={'line': line.rstrip('\r\n')},
        )

        return cls(message, context=error_context)


class ParamNotFound(PlatinaError, KeyError):
    """Error raised when a callback requests an absent parameter.

    The error is local to the case being executed: the runner records it
    as the case failure and carries on with the remaining cases.
    """

    def __init__(self, param: str, *, case: str,
                 available: 'Iterable[str]' = (),
                 filename: str | None = None,
                 line_num: int | None = None) -> None:
        """Initialize a lookup error.

        Args:
            param: Requested parameter name.
            case: Name of the case the lookup ran against.
            available: Parameter names present in the case.
            filename: Name of the golden file.
            line_num: Position of the case header (0-based).
        """
        self.param = param
        self.case = case
        self.available = tuple(available)

        super().__init__(
            f'Parameter {param!r} not found',
            context=ErrorContext(
                filename=filename,
                line_num=line_num,
                case=case,
                param=param,
                element={'available': list(self.available)},
            ),
        )


class TestRunFailed(PlatinaError, AssertionError):
    """Error raised when a run ends with failed cases.

    In verify mode any mismatch fails the run; in update mode only
    callback errors do. The message lists every failing case with its
    mismatches, so a single run reports all failures at once.
    """

    __test__ = False

    def __init__(self, results: 'Iterable[CaseResult]', *,
                 filename: str | None = None) -> None:
        """Initialize a run failure.

        Args:
            results: Results of the failed cases in file order.
            filename: Name of the golden file.
        """
        self.results = tuple(results)
        self.filename = filename

        super().__init__(self.make_report(self.results, filename=filename))

    @property
    def case_names(self) -> tuple[str, ...]:
        """Names of the failed cases in file order."""
        return tuple(result.name for result in self.results)

    @classmethod
    def make_report(cls, results: 'Iterable[CaseResult]', *,
                    filename: str | None = None) -> str:
        """Render a report listing every failed case.

        Args:
            results: Failed case results.
            filename: Name of the golden file.

        Returns:
            A multi-line report with a block per failed case.
        """
        results = tuple(results)
        message = f'{len(results)} golden case(s) failed'

        for result in results:
            message += linesep
            message += cls.format(f'Case failed: {result.name}', ErrorContext(
                filename=filename,
                line_num=result.line_num,
            ))
            for comparison in result.mismatches:
                message += cls._ensure_indent(FORMAT_INDENT)
                message += f'parameter mismatch: {comparison.param}{linesep}'
                message += cls.get_snippet_string(
                    ErrorContext(element={
                        'expected': comparison.expected,
                        'actual': comparison.actual,
                    }),
                    indent=FORMAT_INDENT * 2,
                )
            if result.error is not None:
                message += cls._ensure_indent(FORMAT_INDENT)
                message += f'error: {result.error}{linesep}'

        return message
