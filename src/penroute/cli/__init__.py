"""Command-line interface for penroute.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for cell processing
- Verbose/quiet output modes
- Partition listing for tuning cell thresholds
- JSON export of strokes
"""

from penroute.cli.app import cli, main

__all__ = ["cli", "main"]
