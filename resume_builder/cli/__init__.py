"""Command-line surface for Resume Builder."""

from .app import build_parser, main, run

__all__ = ["build_parser", "main", "run"]
