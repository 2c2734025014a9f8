"""
langredirect/resolver.py

Maps (fragment, locale, host) to the URL the landing page sends the browser to.

Fragments are looked up in a fixed route table:
  TUTORIAL  -> http://<host>/<lang>/tutorial_class/introduction.html
  EXTERNAL  -> fixed off-site URL, locale ignored
  ALIAS     -> fragment renamed, then handled as DEFAULT
  DEFAULT   -> https://<host>/<lang><fragment>
Unsupported locales become DEFAULT_LOCALE. Nothing here raises for any
string input.
"""

from enum import Enum
from types import MappingProxyType
from typing import NamedTuple, Optional

from langredirect.context import RedirectContext
from langredirect.locales.constants import (
    DEFAULT_LOCALE,
    EXTERNAL_DESTINATIONS,
    FRAGMENT_ALIASES,
    LOCALE_ALIASES,
    TUTORIAL_FRAGMENTS,
    TUTORIAL_PATH,
)
from langredirect.locales.loader import LocaleTables, build_tables


class RouteKind(Enum):
    TUTORIAL = "tutorial"
    EXTERNAL = "external"
    ALIAS = "alias"
    DEFAULT = "default"


class Route(NamedTuple):
    kind: RouteKind
    target: Optional[str] = None  # external name or aliased fragment


DEFAULT_ROUTE = Route(RouteKind.DEFAULT)

FRAGMENT_ROUTES = MappingProxyType({
    **{frag: Route(RouteKind.TUTORIAL) for frag in TUTORIAL_FRAGMENTS},
    **{f"#{name}": Route(RouteKind.EXTERNAL, name) for name in EXTERNAL_DESTINATIONS},
    **{frag: Route(RouteKind.ALIAS, new) for frag, new in FRAGMENT_ALIASES.items()},
})

# Built once; callers that load data/locales.json pass their own tables.
DEFAULT_TABLES = build_tables()


def normalize_locale(raw: Optional[str]) -> str:
    code = (raw or "")[:2]
    return LOCALE_ALIASES.get(code, code)


def resolve_locale(context: RedirectContext) -> str:
    return normalize_locale(context.reported_locale)


def classify_fragment(fragment: Optional[str]) -> Route:
    return FRAGMENT_ROUTES.get(fragment or "", DEFAULT_ROUTE)


def pick_locale(locale: str, supported) -> str:
    return locale if locale in supported else DEFAULT_LOCALE


def resolve_destination(fragment: Optional[str], locale: Optional[str], host: str,
                        tables: LocaleTables = None) -> str:
    """
    Destination URL for an already-normalized locale.

    An EXTERNAL route whose name is missing from tables.external is treated
    like any unknown fragment.
    """
    tables = tables or DEFAULT_TABLES
    fragment = fragment or ""
    locale = locale or ""
    route = classify_fragment(fragment)

    if route.kind is RouteKind.TUTORIAL:
        lang = pick_locale(locale, tables.tutorial)
        return f"http://{host}/{lang}/{TUTORIAL_PATH}"

    if route.kind is RouteKind.EXTERNAL and route.target in tables.external:
        return tables.external[route.target]

    if route.kind is RouteKind.ALIAS:
        fragment = route.target

    lang = pick_locale(locale, tables.site)
    return f"https://{host}/{lang}{fragment}"


def find_destination(context: RedirectContext, tables: LocaleTables = None) -> str:
    return resolve_destination(
        context.current_fragment,
        resolve_locale(context),
        context.current_host,
        tables=tables,
    )
