"""
langredirect/locales/loader.py

Central source of truth for locale configuration.
Loads data/locales.json when present, otherwise falls back to the static
tables in langredirect.locales.constants.
"""

import os
import json
from collections import Counter
from types import MappingProxyType
from typing import Mapping, NamedTuple, FrozenSet

from langredirect.locales.constants import (
    DEFAULT_LOCALE,
    EXTERNAL_DESTINATIONS,
    LOCALE_NAMES,
    SITE_LOCALES,
    TUTORIAL_LOCALES,
)
from langredirect.logger import get_logger

logger = get_logger("langredirect.locales.loader")

LOCALES_JSON_PATH = os.getenv("LOCALES_JSON", os.path.join("data", "locales.json"))


class LocaleConfigError(ValueError):
    """Raised when a locale table is unusable (duplicates, empty, unlabeled)."""


class LocaleTables(NamedTuple):
    site: FrozenSet[str]
    tutorial: FrozenSet[str]
    names: Mapping[str, str]
    external: Mapping[str, str]


def _defaults() -> dict:
    return {
        "site": list(SITE_LOCALES),
        "tutorial": list(TUTORIAL_LOCALES),
        "names": dict(LOCALE_NAMES),
        "external": dict(EXTERNAL_DESTINATIONS),
    }


# -------------------------------------------------
# Load locales.json (or fallback)
# -------------------------------------------------
def load_locales_config(path: str = None) -> dict:
    """
    Returns dict:
      {
         "site": ["ar", "bg", ...],
         "tutorial": ["en", "de", ...],
         "names": {"ar": "...", ...},
         "external": {"paypal": "https://...", ...}
      }
    Keys missing from the file keep their default value.
    """
    path = path or LOCALES_JSON_PATH
    cfg = _defaults()

    if not os.path.exists(path):
        logger.debug("No %s, using built-in locale tables.", path)
        return cfg

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value must be an object")
    except (OSError, ValueError) as e:
        logger.error("Failed reading %s: %s", path, e)
        logger.warning("Using built-in locale tables (locales.json invalid).")
        return cfg

    for key in ("site", "tutorial"):
        if isinstance(data.get(key), list):
            cfg[key] = [str(code).strip() for code in data[key]]
    for key in ("names", "external"):
        if isinstance(data.get(key), dict):
            cfg[key].update({str(k): str(v) for k, v in data[key].items()})

    logger.info("Loaded %d site locales from %s", len(cfg["site"]), path)
    return cfg


# -------------------------------------------------
# Freeze into lookup tables
# -------------------------------------------------
def _unique(codes: list, label: str) -> FrozenSet[str]:
    counts = Counter(codes)
    dupes = sorted(c for c, n in counts.items() if n > 1)
    if dupes:
        raise LocaleConfigError(f"duplicate {label} locale codes: {', '.join(dupes)}")
    if not counts:
        raise LocaleConfigError(f"{label} locale list is empty")
    return frozenset(counts)


def build_tables(cfg: dict = None) -> LocaleTables:
    """
    Turn a config dict (see load_locales_config) into immutable tables.

    Every site locale needs a display name, and the default locale must be
    part of both lists so the fallback always lands on a real page.
    """
    cfg = cfg or _defaults()
    site = _unique(cfg.get("site", []), "site")
    tutorial = _unique(cfg.get("tutorial", []), "tutorial")

    for label, codes in (("site", site), ("tutorial", tutorial)):
        if DEFAULT_LOCALE not in codes:
            raise LocaleConfigError(f"{label} locales must include '{DEFAULT_LOCALE}'")

    names = cfg.get("names", {})
    unlabeled = sorted(site - set(names))
    if unlabeled:
        raise LocaleConfigError(f"site locales without a display name: {', '.join(unlabeled)}")

    return LocaleTables(
        site=site,
        tutorial=tutorial,
        names=MappingProxyType({code: names[code] for code in sorted(site)}),
        external=MappingProxyType(dict(cfg.get("external", {}))),
    )


def load_tables(path: str = None) -> LocaleTables:
    return build_tables(load_locales_config(path))
