"""Runtime settings resolved from the environment.

Settings are read from `PLATINA_*` environment variables. Command-line
options of the pytest plugin and the CLI take precedence over them.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pytest_platina.grammar import SEPARATOR_WIDTH
from pytest_platina.models import SettingsModel


class PlatinaSettings(SettingsModel):
    """Settings controlling how golden files are run and written."""

    model_config = SettingsConfigDict(
        env_prefix='PLATINA_',
        frozen=True,
        extra='ignore',
    )

    update: bool = Field(
        default=False,
        title='Update mode',
        description=(
            'Rewrite golden files with computed outputs instead of '
            'failing on mismatches.'
        ),
    )

    encoding: str = Field(
        default='utf-8',
        title='File encoding',
        description='Text encoding used to read and write golden files.',
    )

    separator_width: int = Field(
        default=SEPARATOR_WIDTH,
        ge=SEPARATOR_WIDTH,
        title='Separator width',
        description=(
            'Number of characters in separator lines emitted for new '
            'cases and parameters. Existing separators are kept as is.'
        ),
    )
