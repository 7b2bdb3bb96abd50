"""Golden files on disk.

This module binds the core engine to the filesystem: a golden file is
read once before its cases run and, in update mode, written once after
they all complete.
"""

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING
from warnings import warn

from pytest_platina.core import DocumentParser, DocumentWriter, Runner
from pytest_platina.errors import GoldenUpdateWarning
from pytest_platina.settings import PlatinaSettings

if TYPE_CHECKING:
    from pytest_platina.core import Tester
    from pytest_platina.schema import ChangeLog, Document, VerifyResult

logger = getLogger(__name__)


class GoldenFile:
    """Golden file identified by its path.

    Example::

        def check_length(case):
            total = len(case.get_param('input1')) + len(case.get_param('input2'))
            case.compare_and_update_param('output', f'{total}')

        GoldenFile('tests/length.txt').run_tests(check_length)
    """

    def __init__(self, path: Path | str, *,
                 settings: PlatinaSettings | None = None) -> None:
        """Initialize a golden file.

        Args:
            path: Path to the golden file.
            settings: Runtime settings; read from the environment if omitted.
        """
        self.path = Path(path)
        self.settings = settings or PlatinaSettings()

    def __repr__(self) -> str:
        return f'<GoldenFile {self.path}>'

    def load(self) -> 'Document':
        """Read and parse the golden file.

        Raises:
            MalformedCase: If the file violates the golden file grammar.
        """
        return DocumentParser(self.settings.encoding).parse_file(self.path)

    def run(self, tester: 'Tester', *,
            update: bool | None = None) -> 'VerifyResult | ChangeLog':
        """Run tests in the verify or the update mode.

        Args:
            tester: Test callback invoked once per case.
            update: Whether to update the file; defaults to the settings.

        Returns:
            A verify result or a change log, depending on the mode.
        """
        if update is None:
            update = self.settings.update

        if update:
            return self.run_tests_and_update(tester)

        return self.run_tests(tester)

    def run_tests(self, tester: 'Tester') -> 'VerifyResult':
        """Run tests in this file without modifying it.

        Args:
            tester: Test callback invoked once per case.

        Returns:
            The verify result when every case passed.

        Raises:
            MalformedCase: If the file violates the golden file grammar.
            TestRunFailed: If any case has a mismatch or an error.
        """
        document = self.load()
        result = Runner().run(document, tester).verify()

        logger.debug('verified %d case(s) in %s', len(document.cases), self.path)

        return result.raise_for_failures()

    def run_tests_and_update(self, tester: 'Tester') -> 'ChangeLog':
        """Run tests in this file and rewrite mismatching outputs.

        The file is written only if at least one body changed. Cases
        whose callback raised keep their stored bodies; the changes of
        every other case are written before the run fails.

        Args:
            tester: Test callback invoked once per case.

        Returns:
            The log of changed parameters.

        Raises:
            MalformedCase: If the file violates the golden file grammar.
            TestRunFailed: If any callback raised.
        """
        document = self.load()
        result = Runner(update=True).run(document, tester)
        changelog = result.changelog()

        if changelog:
            writer = DocumentWriter(self.settings.separator_width, self.settings.encoding)
            writer.write_file(result.document, self.path)
            logger.info('updated %d parameter(s) in %s', len(changelog), self.path)
            warn(
                f'Golden file {self.path} updated: {", ".join(changelog.cases)}',
                category=GoldenUpdateWarning,
                stacklevel=2,
            )

        return changelog.raise_for_errors()
