"""CLI commands for citadelctl.

This package contains all subcommand implementations.
"""

from citadelctl.cli.commands import addon, config, gameinfo, status

__all__ = ["addon", "config", "gameinfo", "status"]
