"""Shared CLI utilities."""

from .error_format import error_message
from .error_format import error_with_hint
from .error_format import escape_markup

__all__ = ["error_message", "error_with_hint", "escape_markup"]
