"""Golden file writer.

This module converts documents back into golden file text. Recorded
layout is reused for every element that has one, so untouched content
is reproduced byte for byte and only replaced bodies differ from the
source. Elements created at runtime are rendered canonically.
"""

from logging import getLogger
from typing import TYPE_CHECKING

from pytest_platina.grammar import SEPARATOR_WIDTH

if TYPE_CHECKING:
    from pathlib import Path

if TYPE_CHECKING:
    from pytest_platina.schema import Case, Document

logger = getLogger(__name__)


class DocumentWriter:
    """Writer of documents into golden file text."""

    def __init__(self, separator_width: int = SEPARATOR_WIDTH,
                 encoding: str = 'utf-8') -> None:
        """Initialize the writer.

        Args:
            separator_width: Width of separator lines emitted for new
                cases and parameters.
            encoding: Text encoding used by `write_file`.
        """
        self.separator_width = max(separator_width, SEPARATOR_WIDTH)
        self.encoding = encoding

    def render(self, document: 'Document') -> str:
        """Render a document, keeping recorded layout.

        Args:
            document: Document to render.

        Returns:
            Golden file text.
        """
        content = ''.join(case.render(self.separator_width) for case in document.cases)

        return f'{content}{document.trailer}'

    def format(self, document: 'Document') -> str:
        """Render a document canonically, discarding recorded layout.

        Every case is written as a header, its parameters (header, body,
        separator), a case separator, and a blank line.

        Args:
            document: Document to render.

        Returns:
            Canonical golden file text.
        """
        return ''.join(
            self.strip_layout(case).render(self.separator_width)
            for case in document.cases
        )

    def write_file(self, document: 'Document', path: 'Path | str') -> None:
        """Render a document and write it to a file.

        Args:
            document: Document to render.
            path: Destination path.
        """
        content = self.render(document)
        with open(path, 'wt', encoding=self.encoding, newline='') as output:
            output.write(content)

        logger.info('wrote %d case(s) to %s', len(document.cases), path)

    @staticmethod
    def strip_layout(case: 'Case') -> 'Case':
        """Return a copy of a case without recorded layout."""
        return case.model_copy(update={
            'head': None,
            'tail': None,
            'params': tuple(
                param.model_copy(update={'head': None, 'tail': None, 'eol': ''})
                for param in case.params
            ),
        })
