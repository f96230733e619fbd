"""Command-line entry point for the purchase tracker."""

from .cli import build_parser, main

__all__ = ["build_parser", "main"]
