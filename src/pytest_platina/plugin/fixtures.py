"""Pytest fixtures for golden file tests.

The `platina` fixture returns a factory opening golden files. Relative
paths are resolved against the directory of the requesting test module,
so golden files can live next to the tests that use them::

    def test_length(platina):
        def check(case):
            total = len(case.get_param('input1')) + len(case.get_param('input2'))
            case.compare_and_update_param('output', f'{total}')

        platina('length.txt').run(check)
"""

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from pytest_platina.files import GoldenFile

if TYPE_CHECKING:
    from pytest_platina.settings import PlatinaSettings


class GoldenFactory:
    """Factory of golden files bound to a test module and session settings."""

    def __init__(self, root: Path, settings: 'PlatinaSettings') -> None:
        """Initialize a golden file factory.

        Args:
            root: Directory used to resolve relative paths.
            settings: Session runtime settings.
        """
        self.root = root
        self.settings = settings

    @property
    def update(self) -> bool:
        """Whether the session runs in update mode."""
        return self.settings.update

    def __call__(self, path: Path | str) -> GoldenFile:
        """Open a golden file.

        Args:
            path: Absolute path, or path relative to the test module directory.

        Returns:
            Golden file bound to the session settings.
        """
        path = Path(path)
        if not path.is_absolute():
            path = self.root / path

        return GoldenFile(path, settings=self.settings)


@pytest.fixture
def platina(request: pytest.FixtureRequest) -> GoldenFactory:
    """Provide a factory opening golden files for the requesting test.

    Returns:
        A `GoldenFactory` resolving paths against the test module directory.
    """
    return GoldenFactory(
        request.path.parent,
        request.config.platina_settings,  # type: ignore[attr-defined]
    )
