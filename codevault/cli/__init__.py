"""
cli — command-line interface for codevault.

Entry points
────────────
  python -m codevault   (via codevault/__main__.py)
  codevault             (via pyproject.toml [project.scripts])

Subcommands: run | list | show | encode
"""

from codevault.cli.main import build_parser, cmd_encode, cmd_list, cmd_show, main

__all__ = ["build_parser", "cmd_list", "cmd_show", "cmd_encode", "main"]
