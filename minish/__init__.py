"""Ordered environment, shell builtins, quote helpers, string helpers and printf-style formatting."""

__version__ = "0.1.0"
__all__ = ["environment", "builtins", "parser", "textutils", "cformat"]