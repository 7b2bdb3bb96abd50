"""CLI utilities for pytest-platina golden files.

The commands inspect and normalize golden files without running any
test logic: test callbacks live in user code and are driven by pytest.
"""

from pathlib import Path

from click import ClickException, Context
from click import Path as PathParam
from click import argument, echo, group, option, pass_context, pass_obj

from pytest_platina.core import DocumentParser, DocumentWriter
from pytest_platina.errors import MalformedCase
from pytest_platina.settings import PlatinaSettings

GoldenFilepath = PathParam(
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)


@group(help='Command-line utilities for pytest-platina golden files.')
@pass_context
def cli(ctx: Context) -> None:
    """Root CLI group for pytest-platina tools."""
    ctx.obj = PlatinaSettings()


@cli.command(
    name='check',
    help='Check that golden files are well-formed.',
)
@argument('files', type=GoldenFilepath, nargs=-1, required=True)
@pass_obj
def check_files(settings: PlatinaSettings, files: tuple[Path, ...]) -> None:
    """Parse every file and report malformed ones.

    Args:
        settings: Runtime settings.
        files: Golden files to check.
    """
    parser = DocumentParser(settings.encoding)
    failures = 0

    for path in files:
        try:
            document = parser.parse_file(path)

        except MalformedCase as error:
            failures += 1
            echo(f'{error}', err=True)
            continue

        echo(f'{path}: {len(document.cases)} case(s) ok')

    if failures:
        raise ClickException(f'{failures} malformed file(s)')


@cli.command(
    name='list',
    help='List cases and their parameters.',
)
@argument('file', type=GoldenFilepath)
@pass_obj
def list_cases(settings: PlatinaSettings, file: Path) -> None:
    """Print case names with their parameter names.

    Args:
        settings: Runtime settings.
        file: Golden file to inspect.
    """
    try:
        document = DocumentParser(settings.encoding).parse_file(file)

    except MalformedCase as error:
        raise ClickException(f'{error}') from error

    for case in document.cases:
        echo(f'[{case.name}]')
        for name in case.names:
            echo(f'    {name}')


@cli.command(
    name='format',
    help='Rewrite golden files in the canonical layout.',
)
@option(
    '--check', 'check_only',
    is_flag=True,
    default=False,
    help='Only report files that would be rewritten.',
)
@argument('files', type=GoldenFilepath, nargs=-1, required=True)
@pass_obj
def format_files(settings: PlatinaSettings, files: tuple[Path, ...], check_only: bool) -> None:
    """Normalize layout of golden files.

    Bodies are kept verbatim; only blank lines between elements and
    separator widths are normalized.

    Args:
        settings: Runtime settings.
        files: Golden files to format.
        check_only: Whether to report instead of rewriting.
    """
    parser = DocumentParser(settings.encoding)
    writer = DocumentWriter(settings.separator_width, settings.encoding)
    changed = 0

    for path in files:
        try:
            document = parser.parse_file(path)

        except MalformedCase as error:
            raise ClickException(f'{error}') from error

        original = writer.render(document)
        formatted = writer.format(document)
        if original == formatted:
            continue

        changed += 1
        if check_only:
            echo(f'would reformat {path}')
            continue

        with path.open('wt', encoding=writer.encoding, newline='') as output:
            output.write(formatted)
        echo(f'reformatted {path}')

    if check_only and changed:
        raise ClickException(f'{changed} file(s) would be reformatted')


if __name__ == '__main__':
    cli()
