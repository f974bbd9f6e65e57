import logging
import os
from pathlib import Path

import click

from . import __version__
from .pipeline import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    NullProgress,
    load_config,
    run_pipeline,
)

SUMMARY_OFFSET = 10


class ClickProgress:
    """Progress listener rendering a click progress bar.

    The bar is finished once every item of its stage is done.
    """

    def __init__(self, label: str):
        self.label = label
        self.bar = None
        self.total = 0
        self.loaded = 0

    def on_start(self, total: int, items: list[str]) -> None:
        self.total = total
        self.bar = click.progressbar(
            length=total,
            label=self.label,
            show_pos=True,
            item_show_func=lambda name: name or "",
        )
        self.bar.render_progress()
        if total == 0:
            self.bar.render_finish()

    def on_progress(self, loaded: int, name: str) -> None:
        self.bar.update(loaded - self.loaded, name)
        self.loaded = loaded
        if loaded >= self.total:
            self.bar.render_finish()


def _pad(text: str, char: str, width: int) -> str:
    return text + char * (width - len(text))


def print_summary(entities, parser_config) -> None:
    """Print the box listing generated models and their files."""
    rows = [(entity.name, os.path.relpath(entity.target_file)) for entity in entities]

    width = max([20] + [len(name) + len(target) for name, target in rows])
    if not rows:
        width = max(len(parser_config.cwd), len(parser_config.ext))
    width += SUMMARY_OFFSET

    click.echo(f"│{_pad('', '─', width)}┐")
    if not rows:
        click.echo(f"""│{_pad(' No entities found, check parser "cwd" and "ext".', ' ', width)}│""")
        click.echo(f"├{_pad(f' » cwd: {parser_config.cwd}', ' ', width)}│")
        click.echo(f"├{_pad(f' » ext: {parser_config.ext}', ' ', width)}│")
    else:
        click.echo(f"│{_pad(f' Generated {len(rows)} models:', ' ', width)}│")
        click.echo(f"├{_pad('', '─', width)}┤")
        for name, target in rows:
            click.echo(f"├{_pad(f' » {name} ({target})', ' ', width)}│")
    click.echo(f"└{_pad('', '─', width)}┘")


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True), help=f"Options file (default: ./{DEFAULT_CONFIG_FILENAME})")
@click.option("--cwd", default=None, type=click.Path(file_okay=False, resolve_path=True), help="Override the parser source directory")
@click.option("--out", "-o", default=None, type=click.Path(file_okay=False, resolve_path=True), help="Override the output directory")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution details")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Hide progress bars and summary")
@click.version_option(__version__, prog_name="darmogen")
def darmogen(config, cwd, out, verbose, quiet):
    """Generate Dart models from TypeScript entities."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if config is None:
        config = Path.cwd() / DEFAULT_CONFIG_FILENAME

    try:
        options = load_config(config)
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    if cwd is not None:
        options.parser.cwd = cwd
    if out is not None:
        options.generator.out = out

    if not quiet:
        click.echo(f"darmogen v{__version__}\n")
        click.echo(f'■ Source: "{options.parser.cwd}"')
        click.echo(f'× Target: "{options.generator.out}"\n')

    if not os.path.isdir(options.parser.cwd):
        raise click.ClickException(f'Parser "cwd" folder doesn\'t exist: {options.parser.cwd}')

    parser_progress = NullProgress() if quiet else ClickProgress("Parsing   ")
    generator_progress = NullProgress() if quiet else ClickProgress("Generating")

    try:
        result = run_pipeline(options, parser_progress=parser_progress, generator_progress=generator_progress)
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    if not quiet:
        click.echo("│")
        print_summary(result.generated.written, options.parser)

    errors = result.parsed.errors + result.generated.errors
    for error in errors:
        click.echo(f"Error: {error}", err=True)
    if errors:
        click.echo("Error: Could not generate Dart models.", err=True)
        raise SystemExit(1)
