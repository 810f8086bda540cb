"""Input/output helpers for remotebranch."""

from .config import load_config
from .logging import StructuredLogger

__all__ = ["StructuredLogger", "load_config"]
