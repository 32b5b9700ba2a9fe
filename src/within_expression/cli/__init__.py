"""Within Expression CLI."""

from __future__ import annotations

import sys
from json import JSONDecodeError, dump, dumps, load
from pathlib import Path
from sys import argv
from typing import Annotated, Any

import typer

from within_expression import __version__
from within_expression.expression import (
    EvaluationContext,
    Expression,
    ParsingContext,
    parse_expression,
)
from within_expression.tile.feature import TileFeature
from within_expression.tile.id import CanonicalTileID

from .config import (
    TyperState,
    config_missing,
    generate_empty_config,
    init_config,
    print_config_file,
)
from .logging import Logger, error_panel, info_panel, progress_bar, setup_logger

if not sys.warnoptions:  # pragma: no cover
    import warnings

    warnings.simplefilter("default")

application = typer.Typer()
state = TyperState()


def version_callback(value: bool) -> None:
    """Version callback."""
    if value:
        typer.echo(f"Within Expression, version {__version__}")
        raise typer.Exit


@application.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path,
        typer.Option(
            "-c",
            "--config",
            envvar="WITHIN_EXPRESSION_CONFIG",
            help="Configuration file.",
        ),
    ] = Path(
        "config.yml",
    ),
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Run with debug printouts.",
        ),
    ] = False,
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Within expression evaluation CLI app."""
    if ctx.invoked_subcommand != "config" and not config.exists():  # pragma: no cover
        if "--help" in argv:
            return
        config_missing(config)

    state.config_file = config
    state.debug = debug


def read_json(path: Path) -> Any:  # noqa: ANN401
    """Read a JSON file."""
    if not path.exists():
        error_message = f"File [blue]'{path}'[/blue] does not exist."
        raise error_panel(error_message)

    try:
        with path.open() as f:
            return load(f)
    except JSONDecodeError as e:
        error_message = f"File [blue]'{path}'[/blue] is not valid JSON: {e}"
        raise error_panel(error_message) from e


def load_expression(logger: Logger, path: Path) -> Expression:
    """Load and parse an expression from a JSON file."""
    value = read_json(path)
    ctx = ParsingContext()
    expression = parse_expression(value, ctx)
    if expression is None:
        for error in ctx.errors:
            logger.debug("Parsing error: %r", error)
        raise error_panel(ctx.get_combined_error_message())
    return expression


def load_features(path: Path) -> list[TileFeature]:
    """Load tile features from a JSON file."""
    data = read_json(path)
    if isinstance(data, dict):
        data = data.get("features", [])
    if not isinstance(data, list):
        error_message = f"File [blue]'{path}'[/blue] does not contain a feature list."
        raise error_panel(error_message)

    try:
        return [TileFeature.from_dict(feature) for feature in data]
    except (ValueError, TypeError, IndexError) as e:
        error_message = f"Invalid feature in [blue]'{path}'[/blue]: {e}"
        raise error_panel(error_message) from e


@application.command()
def config(
    generate: Annotated[
        bool,
        typer.Option("--generate", help="Generate empty configuration."),
    ] = False,
) -> None:
    """Print or generate configuration."""
    if generate:
        generate_empty_config(state.config_file)
    else:
        print_config_file(state.config_file)
        init_config(state)


@application.command()
def parse(
    expression_file: Annotated[Path, typer.Argument(help="Expression JSON file")],
) -> None:
    """Parse an expression and print its serialized form."""
    config = init_config(state)
    logger = setup_logger(config)

    expression = load_expression(logger, expression_file)
    logger.info(
        "Parsed [cyan]%s[/] expression",
        expression.get_operator(),
        extra={"markup": True},
    )
    info_panel(dumps(expression.serialize()), title="Expression")


@application.command()
def evaluate(
    expression_file: Annotated[Path, typer.Argument(help="Expression JSON file")],
    features_file: Annotated[Path, typer.Argument(help="Tile features JSON file")],
    tile: Annotated[
        str,
        typer.Option("--tile", help="Canonical tile ID in 'z/x/y' format."),
    ] = "0/0/0",
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Output file for results."),
    ] = None,
) -> None:
    """Evaluate an expression for tile features."""
    config = init_config(state)
    logger = setup_logger(config, "evaluate")

    try:
        canonical = CanonicalTileID.from_string(tile)
    except ValueError as e:
        raise error_panel(str(e)) from e

    expression = load_expression(logger, expression_file)
    features = load_features(features_file)

    message = "Evaluating [cyan]%s[/] for %d feature(s) in tile %r"
    logger.info(
        message,
        expression.get_operator(),
        len(features),
        canonical,
        extra={"markup": True},
    )

    results: dict[str, bool] = {}
    with progress_bar(transient=True) as progress:
        task = progress.add_task("Features", total=len(features))
        for index, feature in enumerate(features):
            params = EvaluationContext(
                feature=feature,
                canonical=canonical,
                diagnostics=logger,
                extent=config.extent,
            )
            key = feature.id if feature.id is not None else str(index)
            results[key] = bool(expression.evaluate(params))
            logger.debug("%s: %s", key, results[key])
            progress.advance(task)

    logger.info(
        "Total %d of %d feature(s) matched",
        sum(results.values()),
        len(results),
    )

    if output:
        with output.open("w") as f:
            dump(results, f, indent=2)
            f.write("\n")
    else:
        info_panel(dumps(results, indent=2), title="Results")


__all__ = ["application"]
