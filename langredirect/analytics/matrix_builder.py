"""
Resolution matrix.
One row per (fragment, locale) pair with the route taken and the resulting
destination, so a translator or reviewer can see every redirect at a glance
without a browser. Written as CSV under data/reports/.
"""
import os
from typing import Iterable, Optional

import pandas as pd

from langredirect.locales.constants import LOCALE_ALIASES
from langredirect.locales.loader import LocaleTables
from langredirect.logger import get_logger
from langredirect.resolver import (
    DEFAULT_TABLES,
    FRAGMENT_ROUTES,
    classify_fragment,
    normalize_locale,
    resolve_destination,
)

logger = get_logger(__name__)

OUT_PATH = os.path.join("data", "reports", "resolution_matrix.csv")

# Fragments with no special route, to show the default case
SAMPLE_FRAGMENTS = ["", "#faq"]
UNSUPPORTED_LOCALE = "xx"

COLUMNS = ["fragment", "reported_locale", "locale", "route", "destination"]


def default_fragments() -> list:
    return sorted(FRAGMENT_ROUTES) + SAMPLE_FRAGMENTS


def default_locales(tables: LocaleTables) -> list:
    return sorted(tables.site) + sorted(LOCALE_ALIASES) + [UNSUPPORTED_LOCALE]


def build_resolution_matrix(host: str, tables: LocaleTables = None,
                            fragments: Optional[Iterable[str]] = None,
                            locales: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """
    `locales` are browser-reported codes; each goes through the same
    truncation and aliasing as a real visit before resolving.
    """
    tables = tables or DEFAULT_TABLES
    fragments = list(fragments) if fragments is not None else default_fragments()
    locales = list(locales) if locales is not None else default_locales(tables)

    rows = []
    for fragment in fragments:
        route = classify_fragment(fragment).kind.value
        for reported in locales:
            locale = normalize_locale(reported)
            rows.append({
                "fragment": fragment,
                "reported_locale": reported,
                "locale": locale,
                "route": route,
                "destination": resolve_destination(fragment, locale, host, tables),
            })

    df = pd.DataFrame(rows, columns=COLUMNS)
    logger.info("Resolution matrix: %d fragments x %d locales = %d rows", len(fragments), len(locales), len(df))
    return df


def write_resolution_matrix(df: pd.DataFrame, out_path: str = OUT_PATH) -> str:
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    df.to_csv(out_path, index=False, encoding="utf-8")
    logger.info("✅ Resolution matrix written -> %s", out_path)
    return out_path


def summarize_destinations(df: pd.DataFrame) -> pd.DataFrame:
    """Count of (fragment, locale) pairs landing on each destination."""
    return (
        df.groupby(["route", "destination"])
        .size()
        .reset_index(name="pairs")
        .sort_values(["route", "pairs"], ascending=[True, False])
        .reset_index(drop=True)
    )
