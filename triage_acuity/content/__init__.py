"""Helpers to load bundled preset and reference-range data."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict

import yaml

from ..errors import PresetNotFoundError

__all__ = ["load_content", "preset_entry", "range_profile_entry"]

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def load_content(name: str) -> Dict[str, Any]:
    """Load the bundled YAML document identified by *name*."""

    with resources.files(__name__).joinpath(f"{name}.yml").open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    logger.debug("Loaded content file %s.yml", name)
    return data


def preset_entry(name: str) -> Dict[str, Any]:
    presets = load_content("presets").get("presets", {})
    try:
        return presets[name]
    except KeyError:
        raise PresetNotFoundError("preset", name) from None


def range_profile_entry(name: str) -> Dict[str, Any]:
    profiles = load_content("reference_ranges").get("profiles", {})
    try:
        return profiles[name]
    except KeyError:
        raise PresetNotFoundError("reference range profile", name) from None
