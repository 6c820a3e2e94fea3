"""Main CLI entry point for cf-inventory."""

import click
from pathlib import Path
from . import __version__
from .analyzer import TemplateAnalyzer
from .config import Config
from .console import configure_logging, print_summary
from .errors import InvalidRootError
from .reporting import REPORTERS, get_reporter


@click.group()
@click.version_option(version=__version__, prog_name="cfinventory")
def cli():
    """cf-inventory - Inventory queries, functions and components of a template tree."""
    pass


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option("--output", "-o", type=click.Path(file_okay=False), help="Report output directory")
@click.option(
    "--format",
    "-f",
    "formats",
    type=click.Choice(sorted(REPORTERS)),
    multiple=True,
    help="Report format (repeatable, default: html)",
)
@click.option("--workers", "-w", type=click.IntRange(min=1), help="Worker threads per pass")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def analyze(root: str, output: str | None, formats: tuple[str, ...], workers: int | None, verbose: bool):
    """Analyze a template tree and write inventory reports.

    Examples:
        # HTML report under ./reports/<root-name>/inventory.html
        cfinventory analyze /srv/legacy-app

        # Markdown and JSON into a custom directory
        cfinventory analyze /srv/legacy-app -f markdown -f json -o out
    """
    configure_logging(verbose)
    config = Config.from_env()
    if workers:
        config = config.model_copy(update={"max_workers": workers})
    output_dir = Path(output) if output else config.output_dir

    click.echo(f"🔍 Scanning template tree: {root}")
    try:
        result = TemplateAnalyzer(config).analyze(Path(root))
    except InvalidRootError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    print_summary(result)

    for format_name in formats or ("html",):
        reporter = get_reporter(format_name)
        try:
            path = reporter.write(result, output_dir)
        except OSError as e:
            click.echo(f"❌ Could not write {format_name} report: {e}", err=True)
            raise SystemExit(1)
        click.echo(f"📝 {format_name} report: {path}")

    click.echo("✅ Analysis complete")


if __name__ == "__main__":
    cli()
