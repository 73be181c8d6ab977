"""Command-line utilities for business process test documents."""

from json import dumps
from logging import basicConfig
from pathlib import Path

from click import ClickException, Context, argument, echo, group, option, pass_context
from click import Path as PathParam
from yaml import safe_dump

from hera_testing.core import DocumentParser
from hera_testing.errors import ParseError
from hera_testing.jsonschema import SchemaGenerator
from hera_testing.settings import HeraTestingSettings

InputFilepath = PathParam(
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)


@group(help='Command-line utilities for HERA business process tests.')
@pass_context
def cli(ctx: Context) -> None:
    """Root CLI group for hera-testing tools."""
    settings = HeraTestingSettings()
    basicConfig(level=settings.log_level)

    ctx.obj = settings


@cli.command(
    name='schema',
    help='Print the test document JSON Schema to standard output.',
)
def print_schema() -> None:
    """Generate and print the JSON Schema."""
    echo(SchemaGenerator.make_schema())


@cli.command(
    name='validate',
    help='Validate test documents and report every schema issue.',
)
@argument('files', type=InputFilepath, nargs=-1, required=True)
def validate(files: tuple[Path, ...]) -> None:
    """Validate documents, failing if any of them is invalid.

    Args:
        files: Paths to test documents.
    """
    parser = DocumentParser()
    failed = 0

    for path in files:
        report = parser.validate(path.read_text(encoding='utf-8'))
        if report['valid']:
            echo(f'{path}: OK')
            continue

        failed += 1
        echo(f'{path}: {len(report['errors'])} issues')
        for error in report['errors']:
            echo(f'    {error}')

    if failed:
        raise ClickException(f'{failed} of {len(files)} documents are invalid')


@cli.command(
    name='info',
    help='Print lightweight metadata of a test document as JSON.',
)
@argument('file', type=InputFilepath)
def info(file: Path) -> None:
    """Print document metadata without validating it.

    Args:
        file: Path to a test document.
    """
    summary = DocumentParser().extract_metadata(file.read_text(encoding='utf-8'))

    echo(dumps(summary, ensure_ascii=False, indent=4))


@cli.command(
    name='resolve',
    help='Parse a test document and print it with templates resolved.',
)
@option(
    '-c', '--clock',
    help='ISO-8601 time used as the run clock.',
    default=None,
)
@argument('file', type=InputFilepath)
@pass_context
def resolve(ctx: Context, file: Path, clock: str | None) -> None:
    """Print the resolved document as YAML.

    Args:
        ctx: Click context holding the settings.
        file: Path to a test document.
        clock: Run clock override, the configured one by default.
    """
    settings: HeraTestingSettings = ctx.obj
    parser = DocumentParser()

    try:
        test = parser.parse(
            file.read_text(encoding='utf-8'),
            clock=clock or settings.clock,
            filename=str(file),
        )
    except ParseError as error:
        raise ClickException(str(error)) from error

    echo(safe_dump(
        test.model_dump(mode='json', exclude_none=True),
        allow_unicode=True,
        sort_keys=False,
    ), nl=False)


if __name__ == '__main__':
    cli()
