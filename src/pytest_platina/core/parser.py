"""Golden file parser.

This module converts golden file text into a validated `Document`.

Parsing is line based and lossless: the raw text around every header,
body, and separator is recorded in the resulting models, so the writer
can reproduce untouched content exactly. Parsing is also atomic: any
structural problem raises `MalformedCase` and no partial document is
returned.
"""

from logging import getLogger
from typing import TYPE_CHECKING

from pytest_platina.errors import MalformedCase
from pytest_platina.grammar import (
    EOL_PATTERN,
    is_blank,
    is_case_separator,
    is_param_separator,
    looks_like_header,
    match_header,
    split_lines,
)
from pytest_platina.schema import Case, Document, Parameter

if TYPE_CHECKING:
    from io import TextIOBase
    from pathlib import Path

logger = getLogger(__name__)


class _CaseBuilder:
    """Mutable accumulator for the case being parsed."""

    def __init__(self, name: str, head: str, line_num: int) -> None:
        self.name = name
        self.head = head
        self.line_num = line_num
        self.params: list[Parameter] = []

        self.param_name: str | None = None
        self.param_head = ''
        self.param_line_num = 0
        self.body: list[str] = []

    def open_param(self, name: str, head: str, line_num: int) -> None:
        self.param_name = name
        self.param_head = head
        self.param_line_num = line_num
        self.body = []

    def close_param(self, tail: str) -> None:
        body = ''.join(self.body)
        eol = ''
        if match := EOL_PATTERN.search(body):
            eol = match.group()
            body = body[:match.start()]

        self.params.append(Parameter(
            name=self.param_name,
            body=body,
            head=self.param_head,
            eol=eol,
            tail=tail,
            line_num=self.param_line_num,
        ))
        self.param_name = None

    def build(self, tail: str) -> Case:
        return Case(
            name=self.name,
            params=tuple(self.params),
            head=self.head,
            tail=tail,
            line_num=self.line_num,
        )


class DocumentParser:
    """Parser of golden files into documents.

    The parser walks the text line by line, in one of three states:
    - outside a case, expecting a case header;
    - inside a case, expecting a parameter header or a case separator;
    - inside a parameter body, expecting a parameter separator.

    Blank lines outside bodies are kept as layout of the next element.
    Inside a body every line is content, including lines that look like
    headers or case separators; only a parameter separator ends a body.
    """

    def __init__(self, encoding: str = 'utf-8') -> None:
        """Initialize the parser.

        Args:
            encoding: Text encoding used by `parse_file`.
        """
        self.encoding = encoding

    def parse(self, content: 'TextIOBase | str', *,
              filename: str | None = None) -> Document:
        """Parse golden file text into a document.

        Args:
            content: Golden file text as a string or a text stream.
            filename: Optional name of the source used in error messages.

        Returns:
            A document with cases in file order.

        Raises:
            MalformedCase: If the text violates the golden file grammar.
        """
        if not isinstance(content, str):
            filename = filename or getattr(content, 'name', None)
            content = content.read()

        cases: list[Case] = []
        names: set[str] = set()

        current: _CaseBuilder | None = None
        pending = ''

        def error(message: str, line: str, line_num: int) -> MalformedCase:
            return MalformedCase.from_line(
                message,
                line,
                line_num=line_num,
                filename=filename,
                case=current.name if current else None,
            )

        for line_num, line in enumerate(split_lines(content)):
            if current is not None and current.param_name is not None:
                if is_param_separator(line):
                    current.close_param(line)
                else:
                    current.body.append(line)
                continue

            if is_blank(line):
                pending += line
                continue

            if current is None:
                if is_case_separator(line) or is_param_separator(line):
                    raise error('Separator found where a case header was expected', line, line_num)
                name = match_header(line)
                if name is None:
                    raise error(self.describe_header(line, 'Case'), line, line_num)
                if name in names:
                    raise error(f'Duplicate case name {name!r}', line, line_num)
                names.add(name)
                current = _CaseBuilder(name, pending + line, line_num)
                pending = ''
                continue

            if is_case_separator(line):
                cases.append(current.build(pending + line))
                current = None
                pending = ''
                continue

            if is_param_separator(line):
                raise error('Parameter separator found where a parameter header was expected',
                            line, line_num)

            name = match_header(line)
            if name is None:
                raise error(self.describe_header(line, 'Parameter'), line, line_num)
            if name in (param.name for param in current.params):
                raise error(f'Duplicate parameter name {name!r}', line, line_num)
            current.open_param(name, pending + line, line_num)
            pending = ''

        if current is not None:
            message = 'End of file before case was terminated'
            if current.param_name is not None:
                message = 'End of file before parameter was terminated'
            raise MalformedCase.from_line(
                message,
                current.head.lstrip(),
                line_num=current.line_num,
                filename=filename,
                case=current.name,
            )

        logger.debug('parsed %d case(s) from %s', len(cases), filename or '<string>')

        return Document(cases=tuple(cases), trailer=pending, filename=filename)

    def parse_file(self, path: 'Path | str') -> Document:
        """Read and parse a golden file.

        Args:
            path: Path to the golden file.

        Returns:
            A document with cases in file order.

        Raises:
            MalformedCase: If the file violates the golden file grammar.
        """
        with open(path, encoding=self.encoding, newline='') as content:
            return self.parse(content.read(), filename=f'{path}')

    @staticmethod
    def describe_header(line: str, kind: str) -> str:
        """Describe why a line is not a valid header.

        Args:
            line: Raw line found where a header was expected.
            kind: Element kind for the message (`Case` or `Parameter`).

        Returns:
            Human-readable error message.
        """
        if looks_like_header(line):
            return f'{kind} header has an invalid name'

        return f'{kind} must be in form [name]'
