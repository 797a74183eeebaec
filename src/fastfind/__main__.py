"""Entry point for ``python -m fastfind``."""

from __future__ import annotations

from fastfind.cli.typer_app import app

if __name__ == "__main__":
    app()
