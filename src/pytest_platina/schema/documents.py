"""Golden document models.

A document is an ordered sequence of cases; a case is an ordered
sequence of named parameters. Besides the structural content (names and
bodies), each element records the raw text surrounding it in the source
file, so that a document can be written back byte for byte.

Layout fields are excluded from `model_dump()`: the dumped form of a
document is its structural identity.
"""

from pydantic import Field

from pytest_platina.grammar import (
    SEPARATOR_WIDTH,
    Name,
    make_case_separator,
    make_header,
    make_param_separator,
)
from pytest_platina.models import SchemaModel


class Parameter(SchemaModel):
    """Named raw-text field of a case.

    The body is the verbatim text between the header line and the
    separator line, without the final line terminator.
    """

    name: Name

    body: str = Field(
        default='',
        title='Parameter body',
        description='Verbatim content between the header and the separator.',
    )

    head: str | None = Field(
        default=None,
        exclude=True,
        description='Raw blank lines and header line preceding the body.',
    )

    eol: str = Field(
        default='',
        exclude=True,
        description='Line terminator removed from the final body line.',
    )

    tail: str | None = Field(
        default=None,
        exclude=True,
        description='Raw separator line following the body.',
    )

    line_num: int | None = Field(
        default=None,
        exclude=True,
        description='Position of the header line in the source (0-based).',
    )

    def render(self, width: int | None = None) -> str:
        """Render the parameter as text.

        Recorded layout is reused when available; a parameter without
        recorded layout is rendered canonically.

        Args:
            width: Separator width for canonical rendering.

        Returns:
            Text of the header, the body, and the separator.
        """
        head = self.head if self.head is not None else make_header(self.name)
        tail = self.tail if self.tail is not None else make_param_separator(width or SEPARATOR_WIDTH)

        eol = self.eol
        if not eol and (self.tail is None or self.body):
            eol = '\n'

        return f'{head}{self.body}{eol}{tail}'

    def replace_body(self, body: str) -> 'Parameter':
        """Return a copy with a new body and the same layout."""
        return self.model_copy(update={'body': body})


class Case(SchemaModel):
    """Named unit of parameterized test data."""

    name: Name

    params: tuple[Parameter, ...] = Field(
        default=(),
        title='Case parameters',
        description='Parameters in file order.',
    )

    head: str | None = Field(
        default=None,
        exclude=True,
        description='Raw blank lines and header line opening the case.',
    )

    tail: str | None = Field(
        default=None,
        exclude=True,
        description='Raw blank lines and separator line closing the case.',
    )

    line_num: int | None = Field(
        default=None,
        exclude=True,
        description='Position of the header line in the source (0-based).',
    )

    def get(self, name: str) -> Parameter | None:
        """Find a parameter by name."""
        for param in self.params:
            if param.name == name:
                return param

        return None

    @property
    def names(self) -> tuple[str, ...]:
        """Parameter names in file order."""
        return tuple(param.name for param in self.params)

    def render(self, width: int | None = None) -> str:
        """Render the case as text.

        Args:
            width: Separator width for canonical rendering.

        Returns:
            Text of the header, every parameter, and the separator.
        """
        head = self.head if self.head is not None else make_header(self.name)
        tail = self.tail if self.tail is not None else f'{make_case_separator(width or SEPARATOR_WIDTH)}\n'

        params = ''.join(param.render(width) for param in self.params)

        return f'{head}{params}{tail}'


class Document(SchemaModel):
    """Parsed golden file."""

    cases: tuple[Case, ...] = Field(
        default=(),
        title='Cases',
        description='Cases in file order.',
    )

    trailer: str = Field(
        default='',
        exclude=True,
        description='Raw whitespace following the last case.',
    )

    filename: str | None = Field(
        default=None,
        exclude=True,
        description='Name of the source file, used in error messages.',
    )

    def get(self, name: str) -> Case | None:
        """Find a case by name."""
        for case in self.cases:
            if case.name == name:
                return case

        return None

    @property
    def names(self) -> tuple[str, ...]:
        """Case names in file order."""
        return tuple(case.name for case in self.cases)
