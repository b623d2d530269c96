"""Command-line interface for polelabel.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar for multi-polygon documents
- Verbose/quiet output modes
- Console-only mode (--print) for quick inspection
- Detailed error reporting
"""

from polelabel.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
