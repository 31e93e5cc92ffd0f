"""Command-line interface for glyphsdf.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for glyph rendering
- Verbose/quiet output modes
- Dry-run mode for checking character coverage
- Detailed error reporting
"""

from glyphsdf.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
