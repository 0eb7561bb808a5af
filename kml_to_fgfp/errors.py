"""Errors raised by the converter.

Field-level problems inside a placemark never surface here; the scanner drops
the placemark and keeps going. These are for the caller-facing failures.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ConversionError(Exception):
    """Base exception for conversion failures."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(ConversionError):
    """Bad arguments, airport codes or configuration files."""
