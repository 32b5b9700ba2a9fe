"""Configuration utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from within_expression.tile import EXTENT

from .logging import error_panel, info_panel


class TyperState:
    """Execution configuration state."""

    def __init__(self) -> None:
        """Initialize configuration state."""
        self.config_file: Path = Path("config.yml")
        self.debug: bool = False


class Configuration:
    """Configuration helper."""

    def __init__(self, path: Path) -> None:
        """Initialize configuration helper."""
        self.debug: bool = False
        self.path: Path = path
        self.log_disabled: bool = False
        self.log_path: Path = Path()
        self.extent: int = EXTENT

    def to_object(self) -> dict[str, Any]:
        """Convert configuration to object."""
        return {
            "Logging": {
                "disabled": str(self.log_disabled),
                "path": str(self.log_path),
                "debug": self.debug,
            },
            "Tiles": {
                "extent": self.extent,
            },
        }


def config_missing(config_file: Path) -> None:
    """Print config missing message."""
    error_message = (
        f"Configuration file [blue]'{config_file}'[/blue] does not exist.\n"
        "Please run"
        " [blue]'within-expression config [bold]--generate[/bold]'[/blue]"
        " to generate it.\n"
        "Optionally you can specify the path using the"
        " [blue]'[bold]--config[/bold]'[/blue] option"
        " or using the environment variable"
        " [blue bold]WITHIN_EXPRESSION_CONFIG[/blue bold]."
    )
    raise error_panel(error_message)


def generate_empty_config(config_file: Path) -> None:
    """Generate empty config file."""
    if config_file.exists():
        error_message = (
            f"Configuration file [blue]'{config_file}'[/blue] already exists."
        )
        raise error_panel(error_message)

    config = {
        "logging": {
            "path": "",
            "disabled": True,
        },
        "tiles": {
            "extent": EXTENT,
        },
    }

    with config_file.open("w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    print_config_file(config_file)


def print_config_file(config_file: Path) -> None:
    """Print config file content."""
    if not config_file.exists():
        config_missing(config_file)

    with config_file.open() as f:
        config = yaml.safe_load(f)

    info_panel(
        yaml.dump(config, default_flow_style=False, sort_keys=False).strip("\n"),
        title=f"Configuration file: [bold]{config_file}[/bold]",
    )


def init_config(state: TyperState) -> Configuration:
    """Initialise configuration from CLI state."""
    if not state.config_file.exists():
        config_missing(state.config_file)

    with state.config_file.open() as f:
        config = yaml.safe_load(f) or {}

    configuration = Configuration(state.config_file)
    if "logging" in config and "disabled" in config["logging"]:
        configuration.log_disabled = config["logging"]["disabled"]
    if (
        "logging" in config
        and "path" in config["logging"]
        and config["logging"]["path"]
    ):
        configuration.log_path = Path(config["logging"]["path"])
    if "tiles" in config and "extent" in config["tiles"]:
        extent = config["tiles"]["extent"]
        if not isinstance(extent, int) or isinstance(extent, bool) or extent <= 0:
            error_message = (
                "Tile extent needs to be a positive integer,"
                f" got [blue]{extent}[/blue]."
            )
            raise error_panel(error_message)
        configuration.extent = extent

    configuration.debug = state.debug

    info_panel(
        yaml.dump(
            configuration.to_object(),
            default_flow_style=False,
            sort_keys=False,
        ).strip("\n"),
        title="Configuration",
    )

    return configuration
