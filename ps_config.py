#!/usr/bin/env python3
# ps_config.py · v0.1.0
"""
Run configuration for the synthetic PowerShell generators.

Defaults live in GenerationRequest.  An optional YAML file can override any
of them, and can swap catalog pools or script templates:

    count: 50
    output_dir: out/scripts
    profile: Medium            # pin one size profile
    seed: 7
    include_comments: false
    profile_weights: {Small: 50, Large: 50}
    catalog:
      Verbs: [Get, Set]
      templates:
        Hello: "Write-Output 'hello from __SERVER__'"

Explicit command-line arguments win over the file.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ps_catalog import NAME_POOLS, OPERATION_POOLS, SCRIPT_TEMPLATES, CatalogError, TemplateCatalog, build_catalog
from ps_document import DEFAULT_WEIGHTS, resolve_profile

__version__ = "0.1.0"

KNOWN_KEYS = {"count", "output_dir", "profile", "seed", "include_comments", "profile_weights", "catalog"}


class ConfigError(Exception):
    """Raised when generator configuration is invalid or unreadable."""


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    count: int = 100
    output_dir: Path = Path("synthetic_ps")
    profile: Optional[str] = None
    include_comments: bool = True
    seed: Optional[int] = None
    profile_weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ConfigError(f"count must be >= 0, got {self.count}")
        if self.profile is not None:
            try:
                object.__setattr__(self, "profile", resolve_profile(self.profile).name)
            except ValueError as e:
                raise ConfigError(str(e)) from e
        object.__setattr__(self, "profile_weights", _check_weights(self.profile_weights))

    def merged(self, **overrides: Any) -> "GenerationRequest":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _check_weights(weights: Mapping[str, Any]) -> Dict[str, float]:
    if not isinstance(weights, Mapping) or not weights:
        raise ConfigError("profile_weights must be a non-empty mapping")
    checked: Dict[str, float] = {}
    for name, value in weights.items():
        try:
            profile = resolve_profile(str(name))
        except ValueError as e:
            raise ConfigError(str(e)) from e
        try:
            weight = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Weight for {name} is not a number: {value!r}") from e
        if weight < 0:
            raise ConfigError(f"Weight for {name} must be >= 0")
        checked[profile.name] = weight
    if sum(checked.values()) <= 0:
        raise ConfigError("profile_weights must have a positive sum")
    return checked


def parse_weights(text: str) -> Dict[str, float]:
    """Parse ``Small=40,Medium=30`` into a validated weight mapping."""
    weights: Dict[str, Any] = {}
    for item in filter(None, (part.strip() for part in text.split(","))):
        name, sep, value = item.partition("=")
        if not sep:
            raise ConfigError(f"Expected NAME=WEIGHT, got {item!r}")
        weights[name.strip()] = value.strip()
    return _check_weights(weights)


def load_config(path: Path) -> Dict[str, Any]:
    """Read a YAML config file into a plain mapping.

    Raises:
        ConfigError: If the file is missing, unreadable, not YAML, or not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    unknown = set(data) - KNOWN_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")
    return data


def request_from_config(data: Mapping[str, Any], defaults: GenerationRequest) -> GenerationRequest:
    values: Dict[str, Any] = {}
    if "count" in data:
        if not isinstance(data["count"], int) or isinstance(data["count"], bool):
            raise ConfigError(f"count must be an integer, got {data['count']!r}")
        values["count"] = data["count"]
    if "output_dir" in data:
        values["output_dir"] = Path(str(data["output_dir"]))
    if "profile" in data:
        values["profile"] = str(data["profile"])
    if "seed" in data:
        seed = data["seed"]
        if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
            raise ConfigError(f"seed must be an integer, got {seed!r}")
        values["seed"] = seed
    if "include_comments" in data:
        values["include_comments"] = bool(data["include_comments"])
    if "profile_weights" in data:
        values["profile_weights"] = data["profile_weights"]
    return replace(defaults, **values)


def catalog_from_config(data: Mapping[str, Any]) -> TemplateCatalog:
    overrides = data.get("catalog") or {}
    if not isinstance(overrides, dict):
        raise ConfigError("catalog must be a mapping of category -> fragments")
    names = dict(NAME_POOLS)
    operations = dict(OPERATION_POOLS)
    templates = overrides.get("templates", SCRIPT_TEMPLATES)
    if not isinstance(templates, Mapping):
        raise ConfigError("catalog.templates must be a mapping of label -> body")
    for category, pool in overrides.items():
        if category == "templates":
            continue
        if category in NAME_POOLS:
            names[category] = pool
        else:
            operations[category] = pool
    try:
        return build_catalog(names, operations, templates)
    except CatalogError as e:
        raise ConfigError(f"Invalid catalog override: {e}") from e
