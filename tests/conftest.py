"""Tests configuration."""

from os import environ
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def env(tmp_path: Path) -> dict[str, str]:
    """Return environment for tests."""
    values: dict[str, str] = {
        "WITHIN_EXPRESSION_CONFIG": str(tmp_path / "test.yml"),
    }
    for key, value in values.items():
        environ[key] = value
    return values


@pytest.fixture()
def config_file(env: dict[str, str]) -> Path:
    """Return a generated configuration file."""
    path = Path(env["WITHIN_EXPRESSION_CONFIG"])
    path.write_text(
        "logging:\n  path: ''\n  disabled: true\ntiles:\n  extent: 8192\n",
    )
    return path


class RecordingDiagnostics:
    """Diagnostics recorder."""

    def __init__(self) -> None:
        """Initialise recorder."""
        self.warnings: list[str] = []

    def warning(self, msg: str, *args: object) -> None:
        """Record a warning."""
        self.warnings.append(msg % args if args else msg)


@pytest.fixture()
def diagnostics() -> RecordingDiagnostics:
    """Return diagnostics recorder."""
    return RecordingDiagnostics()
