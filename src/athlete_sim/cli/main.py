"""
CLI entry point using Typer.

Provides commands for physiology projection:
- simulate: Project one regimen month by month
- optimize: Search the regimen grid for the best plan
- reference: Show typical values for an age
"""

from .app import app
from .commands import optimization, simulation  # noqa: F401  (registers commands)


def main() -> None:
    """Run the athlete-sim CLI."""
    app()


if __name__ == "__main__":
    main()
