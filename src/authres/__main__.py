# SPDX-License-Identifier: MPL-2.0
"""
authres - Main entry point for the CLI.

This module provides the command-line interface for the authres package.
"""

from authres.cli.main import cli

if __name__ == "__main__":
    cli()
