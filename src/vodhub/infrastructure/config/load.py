"""Layered configuration loading for vodhub.

Layers, lowest to highest precedence::

    DEFAULT_CONFIG < config.yaml < VODHUB_* env (and .env) < CLI flags

Every layer is first normalized into the sectioned YAML shape
(``http``/``search``/``logging``/``cache`` plus top-level ``sites``),
merged, and validated once as ``AppConfig``.
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTION_KEYS: frozenset[str] = frozenset({"http", "search", "logging", "cache"})
_TOP_LEVEL_KEYS: tuple[str, ...] = ("app_name", "environment")

# Flat field name (EnvOverrides / CLI) -> (section, key) in YAML.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_user_agent": ("http", "user_agent"),
    "http_follow_redirects": ("http", "follow_redirects"),
    "search_timeout_seconds": ("search", "timeout_seconds"),
    "detail_timeout_seconds": ("search", "detail_timeout_seconds"),
    "max_search_pages": ("search", "max_pages"),
    "strict_pattern_sources": ("search", "strict_pattern_sources"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "cache_time_seconds": ("cache", "time_seconds"),
}


def _merge_into(base: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *layer* over *base* in place.

    Sections merge key by key. ``sites`` is a list and is replaced whole,
    so a YAML file never inherits sites from a lower layer.
    """
    for key, value in layer.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            base[key] = value
    return base


def _normalize_sites(sites: Any) -> Any:
    """Accept ``sites`` as a list of entries or as ``{key: {name, api, ...}}``."""
    if isinstance(sites, Mapping):
        return [
            {"key": key, **(entry if isinstance(entry, Mapping) else {})}
            for key, entry in sites.items()
        ]
    return sites


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """Bring one layer into the sectioned shape ``AppConfig`` validates.

    Sectioned blocks pass through; flat keys from env/CLI are moved into
    their section (``max_search_pages`` -> ``search.max_pages``).
    """
    out: dict[str, Any] = {
        section: dict(data[section])
        for section in _SECTION_KEYS
        if isinstance(data.get(section), Mapping)
    }

    for key in _TOP_LEVEL_KEYS:
        if key in data:
            out[key] = data[key]
    if "sites" in data:
        out["sites"] = _normalize_sites(data["sites"])

    for flat_key, (section, section_key) in _FLAT_KEYS.items():
        if flat_key in data:
            out.setdefault(section, {})[section_key] = data[flat_key]

    return out


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Build the validated ``AppConfig`` for one process.

    Raises:
        FileNotFoundError: *config_path* or *dotenv_path* does not exist.
        ValueError: The YAML document is not a mapping.
        pydantic.ValidationError: The merged result is invalid (bad site
            URL, duplicate site key, ``search.max_pages`` < 1, ...).

    Reads files only; never creates any.
    """
    # .env feeds the environment layer; real env vars win over it.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    merged = _normalize_layer(deepcopy(DEFAULT_CONFIG))

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(config_path)
        _merge_into(merged, _normalize_layer(_read_yaml_config(config_path)))

    _merge_into(merged, _normalize_layer(EnvOverrides().to_update_dict()))
    _merge_into(merged, _normalize_layer(cli_overrides or {}))

    return AppConfig.model_validate(merged)
