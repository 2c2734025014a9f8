"""
langredirect/page.py

Writes the static landing page: an inline script that replays the resolver
in the browser, plus a <noscript> list with one link per site locale.
Both are rendered from the same LocaleTables.
"""

import os
import html
import json
from string import Template

from langredirect.locales.constants import (
    DEFAULT_LOCALE,
    FRAGMENT_ALIASES,
    LOCALE_ALIASES,
    TUTORIAL_FRAGMENTS,
    TUTORIAL_PATH,
)
from langredirect.locales.loader import LocaleTables
from langredirect.logger import get_logger
from langredirect.resolver import DEFAULT_TABLES, RouteKind, classify_fragment

logger = get_logger("langredirect.page")

DEFAULT_TITLE = "My Expenses"

PAGE_TEMPLATE = Template("""<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Type" content="text/html; charset=UTF-8"/>
<title>$title</title>
<script type="text/javascript">
var SITE_LOCALES = $site;
var TUTORIAL_LOCALES = $tutorial;
var TUTORIAL_FRAGMENTS = $tutorial_fragments;
var EXTERNAL = $external;
var FRAGMENT_ALIASES = $fragment_aliases;
var LOCALE_ALIASES = $locale_aliases;

function getURLParameter(name) {
  var match = new RegExp("[?&]" + name + "=([^&]*)").exec(window.location.search);
  if (!match)
    return "";
  try {
    return decodeURIComponent(match[1]);
  } catch (e) {
    // malformed escape: treat the parameter as absent
    return "";
  }
}
function pick(lang, supported) {
  return supported.indexOf(lang) > -1 ? lang : "$default_locale";
}
function findDestination() {
  var nav = window.navigator;
  var userLang = (getURLParameter("lang") || nav.userLanguage || nav.language || "").substring(0, 2);
  if (LOCALE_ALIASES.hasOwnProperty(userLang))
    userLang = LOCALE_ALIASES[userLang];
  var host = window.location.host;
  var hash = window.location.hash;
  if (TUTORIAL_FRAGMENTS.indexOf(hash) > -1)
    return "http://" + host + "/" + pick(userLang, TUTORIAL_LOCALES) + "/$tutorial_path";
  if (EXTERNAL.hasOwnProperty(hash))
    return EXTERNAL[hash];
  if (FRAGMENT_ALIASES.hasOwnProperty(hash))
    hash = FRAGMENT_ALIASES[hash];
  return "https://" + host + "/" + pick(userLang, SITE_LOCALES) + hash;
}
window.location.replace(findDestination());
</script>
</head>
<body>
<noscript>
<ul>
$links
</ul>
</noscript>
</body>
</html>
""")


def _js(value) -> str:
    # "</" would end the <script> element early
    return json.dumps(value, sort_keys=True).replace("</", "<\\/")


def render_fallback_links(tables: LocaleTables) -> str:
    return "\n".join(
        f'    <li><a href="{html.escape(code)}">{html.escape(tables.names[code])}</a></li>'
        for code in sorted(tables.site)
    )


def external_routes(tables: LocaleTables) -> dict:
    """Fragment -> URL for the external routes the resolver knows about."""
    routes = {}
    for name, url in tables.external.items():
        if classify_fragment(f"#{name}").kind is RouteKind.EXTERNAL:
            routes[f"#{name}"] = url
    return routes


def render_redirect_page(tables: LocaleTables = None, title: str = DEFAULT_TITLE) -> str:
    tables = tables or DEFAULT_TABLES
    return PAGE_TEMPLATE.substitute(
        title=html.escape(title),
        site=_js(sorted(tables.site)),
        tutorial=_js(sorted(tables.tutorial)),
        tutorial_fragments=_js(list(TUTORIAL_FRAGMENTS)),
        external=_js(external_routes(tables)),
        fragment_aliases=_js(FRAGMENT_ALIASES),
        locale_aliases=_js(LOCALE_ALIASES),
        default_locale=DEFAULT_LOCALE,
        tutorial_path=TUTORIAL_PATH,
        links=render_fallback_links(tables),
    )


def write_redirect_page(out_path: str, tables: LocaleTables = None, title: str = DEFAULT_TITLE) -> str:
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    page = render_redirect_page(tables, title=title)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(page)
    logger.info("Wrote redirect page -> %s (%d locales)", out_path, len((tables or DEFAULT_TABLES).site))
    return out_path
