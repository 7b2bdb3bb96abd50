"""Pytest plugin for golden file tests.

This module integrates `pytest-platina` with pytest by:
- registering the `--platina-update` command-line option and the
  `platina_update` ini flag;
- resolving shared runtime settings once per session;
- providing the `platina` fixture that opens golden files relative to
  the requesting test module.

In update mode golden files are rewritten instead of failing on
mismatches, and every rewritten file is reported as a warning.
"""

from typing import TYPE_CHECKING

from pytest_platina.settings import PlatinaSettings

from .fixtures import GoldenFactory, platina

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser

__all__ = (
    'GoldenFactory',
    'platina',
)


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-platina.

    Args:
        parser: Pytest argument parser.
    """
    group = parser.getgroup('platina', 'golden file testing')
    group.addoption(
        '--platina-update',
        action='store_true',
        dest='platina_update',
        default=False,
        help=(
            'Rewrite golden files with computed outputs instead of failing '
            'on mismatches. Can also be enabled with PLATINA_UPDATE=1.'
        ),
    )
    parser.addini(
        'platina_update',
        type='bool',
        default=False,
        help='Rewrite golden files with computed outputs.',
    )


def pytest_configure(config: 'Config') -> None:
    """Resolve runtime settings for the session.

    Settings are read from `PLATINA_*` environment variables; the
    command-line option and the ini flag can only enable update mode.
    The result is attached as `config.platina_settings`.

    Args:
        config: Pytest configuration object.
    """
    settings = PlatinaSettings()
    if config.getoption('platina_update', default=False) or config.getini('platina_update'):
        settings = settings.model_copy(update={'update': True})

    config.platina_settings = settings  # type: ignore[attr-defined]


def pytest_report_header(config: 'Config') -> str:
    """Report the golden file mode in the session header.

    Args:
        config: Pytest configuration object.

    Returns:
        A single header line.
    """
    settings: PlatinaSettings = config.platina_settings  # type: ignore[attr-defined]

    return f'platina: {"update" if settings.update else "verify"} mode'
