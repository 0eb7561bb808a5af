"""Diagnostics go to stderr so the flight plan and report stay clean.

Env options (optional):
- KML_TO_FGFP_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR (default WARNING)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LEVEL_ENV = "KML_TO_FGFP_LOG_LEVEL"

_INITIALIZED = False


def _get_level(level: Optional[str] = None) -> int:
    name = (level or os.getenv(LEVEL_ENV) or "WARNING").upper()
    value = getattr(logging, name, None)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: Optional[str] = None) -> None:
    global _INITIALIZED
    root = logging.getLogger()
    root.setLevel(_get_level(level))
    if _INITIALIZED:
        return

    sh = logging.StreamHandler(stream=sys.stderr)
    sh.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(sh)

    _INITIALIZED = True
