"""Configuration loading utilities for remotebranch."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping as MappingABC
from pathlib import Path
from typing import Any, cast
from collections.abc import Mapping

from pydantic import ValidationError

from remotebranch.core.models import Config

_SECTION_KEYS: dict[str, dict[str, str]] = {
    "remote": {"default": "default_origin"},
    "branch": {"trunk": "trunk_branch"},
    "git": {"binary": "git_binary"},
    "output": {"verbose": "verbose", "json_logs": "json_logs"},
}


def load_config(
    *,
    path: Path | str | None = None,
    data: str | bytes | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Load and validate configuration from TOML data.

    Exactly one of ``path`` or ``data`` must be provided. ``overrides`` allows
    callers to patch specific sections before validation, which is useful for
    CLI flags or tests.
    """
    if (path is None and data is None) or (path is not None and data is not None):
        msg = "Provide exactly one of 'path' or 'data' when loading configuration."
        raise ValueError(msg)

    raw_content: dict[str, Any]
    try:
        if path is not None:
            path = Path(path)
            if not path.exists():
                raise FileNotFoundError(path)
            raw_content = tomllib.loads(path.read_text())
        else:
            if data is None:
                msg = "Configuration data must be provided when path is omitted."
                raise ValueError(msg)
            text = data if isinstance(data, str) else data.decode()
            raw_content = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid configuration: {exc}"
        raise ValueError(msg) from exc

    if overrides is not None:
        typed_overrides: dict[str, Any] = {str(key): value for key, value in overrides.items()}
        raw_content = _merge_dicts(dict(raw_content), typed_overrides)

    normalised = _normalise(raw_content)

    try:
        return Config.model_validate(normalised)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        msg = f"Invalid configuration: {details}"
        raise ValueError(msg) from exc


def _merge_dicts(base: dict[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in updates.items():
        if (
            key in base
            and isinstance(base[key], MappingABC)
            and isinstance(value, MappingABC)
        ):
            nested_base = cast("dict[str, Any]", dict(base[key]))
            nested_updates = cast("Mapping[str, Any]", value)
            base[key] = _merge_dicts(nested_base, nested_updates)
        else:
            base[key] = value
    return base


def _normalise(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten the sectioned TOML layout onto the :class:`Config` field names.

    Flat keys are accepted too; a sectioned key wins over its flat spelling.
    Unknown keys are passed through so validation reports them.
    """
    config_dict: dict[str, Any] = {
        key: value for key, value in raw.items() if key not in _SECTION_KEYS
    }
    for section, keys in _SECTION_KEYS.items():
        values = raw.get(section)
        if values is None:
            continue
        if not isinstance(values, MappingABC):
            config_dict[section] = values
            continue
        typed_values = cast("Mapping[str, Any]", values)
        for key, value in typed_values.items():
            field = keys.get(key, f"{section}.{key}")
            config_dict[field] = value
    return config_dict


__all__ = ["load_config"]
