"""Result rendering package."""

from __future__ import annotations

from .formatter import ResultFormatter, format_word

__all__ = ["ResultFormatter", "format_word"]
