"""Structured logging utilities."""

from __future__ import annotations

import json
import re
import sys
from collections.abc import Mapping as MappingABC
from datetime import datetime, UTC
from typing import Any, TextIO, cast
from collections.abc import Mapping

from pydantic import BaseModel, SecretStr, field_validator

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}

# Remote URLs and git output may carry credentials.
_SENSITIVE_PATTERNS = (
    (re.compile(r"(https?://)[^/\s:@]+:[^/\s@]+@", re.IGNORECASE), r"\1***:***@"),
    (re.compile(r"(https?://)[^/\s:@]+@", re.IGNORECASE), r"\1***@"),
    (re.compile(r"token[=:]\s*\S+", re.IGNORECASE), "token=***"),
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,}\b"), "gh*_***"),
)


class _SanitizedText(BaseModel):
    """Model that masks credentials embedded in log text."""

    text: SecretStr

    @field_validator("text", mode="before")
    @classmethod
    def _mask_sensitive_data(cls, value: Any) -> str:
        text = str(value)
        for pattern, replacement in _SENSITIVE_PATTERNS:
            text = pattern.sub(replacement, text)
        return text


def sanitize_text(text: str) -> str:
    """Mask credentials in ``text``."""
    sanitized = _SanitizedText.model_validate({"text": text})
    return sanitized.text.get_secret_value()


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        return sanitize_text(value)
    if isinstance(value, MappingABC):
        typed_mapping = cast("Mapping[Any, Any]", value)
        return {key: _sanitize_value(item) for key, item in typed_mapping.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        typed_items = cast("list[Any]", value)
        return [_sanitize_value(item) for item in typed_items]
    return value


class StructuredLogger:
    """Structured logger writing JSON lines or single-line text records."""

    def __init__(
        self,
        *,
        name: str,
        json_mode: bool = False,
        stream: TextIO | None = None,
        level: str = "DEBUG",
    ) -> None:
        """Initialise the structured logger."""
        if level not in _LEVELS:
            msg = f"unknown log level: {level!r}"
            raise ValueError(msg)
        self._name = name
        self._json_mode = json_mode
        self._stream: TextIO = stream or sys.stderr
        self._threshold = _LEVELS[level]

    @property
    def name(self) -> str:
        """Return the logger name."""
        return self._name

    @property
    def json_mode(self) -> bool:
        """Return whether JSON mode is enabled."""
        return self._json_mode

    def debug(self, message: str, **fields: Any) -> None:
        """Log a DEBUG-level message."""
        self._emit("DEBUG", message, fields)

    def info(self, message: str, **fields: Any) -> None:
        """Log an INFO-level message."""
        self._emit("INFO", message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        """Log a WARNING-level message."""
        self._emit("WARNING", message, fields)

    def error(self, message: str, **fields: Any) -> None:
        """Log an ERROR-level message."""
        self._emit("ERROR", message, fields)

    def _emit(self, level: str, message: str, fields: dict[str, Any]) -> None:
        if _LEVELS[level] < self._threshold:
            return
        timestamp = datetime.now(UTC).isoformat()
        sanitised_message = sanitize_text(message)
        sanitised_fields = {key: _sanitize_value(value) for key, value in fields.items()}
        if self._json_mode:
            payload: dict[str, Any] = {
                "timestamp": timestamp,
                "level": level,
                "logger": self._name,
                "message": sanitised_message,
            }
            payload.update(sanitised_fields)
            self._stream.write(json.dumps(payload, ensure_ascii=False) + "\n")
        else:
            line = f"[{timestamp}] {level:<7} {self._name}: {sanitised_message}"
            if sanitised_fields:
                extras = " ".join(
                    f"{key}={json.dumps(value, ensure_ascii=False)}" for key, value in sanitised_fields.items()
                )
                line = f"{line} | {extras}"
            self._stream.write(line + "\n")
        self._stream.flush()


__all__ = ["StructuredLogger", "sanitize_text"]
