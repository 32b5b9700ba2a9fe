"""Within Expression CLI entry point."""

from within_expression.cli import application

application()
