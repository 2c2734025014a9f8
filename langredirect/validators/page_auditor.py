# langredirect/validators/page_auditor.py
"""
Checks a landing page's <noscript> fallback list against the site locales.
Pages written by langredirect.page always pass; hand-edited or older pages
are where the two lists drift.
"""

from typing import Any, Dict, List

from bs4 import BeautifulSoup

from langredirect.locales.loader import LocaleTables
from langredirect.logger import get_logger
from langredirect.resolver import DEFAULT_TABLES

logger = get_logger("langredirect.validators.page_auditor")


def extract_fallback_links(html_text: str) -> List[Dict[str, str]]:
    """
    Returns [{"href": "de", "label": "Meine Ausgaben"}, ...] for every anchor
    inside a <noscript> element, in document order.
    """
    soup = BeautifulSoup(html_text or "", "html.parser")
    links = []
    for block in soup.find_all("noscript"):
        # html.parser keeps <noscript> children as markup; re-parse when it
        # comes back as a single text node
        inner = block if block.find("a") else BeautifulSoup(block.get_text(), "html.parser")
        for a in inner.find_all("a"):
            href = (a.get("href") or "").strip().strip("/")
            if not href:
                continue
            links.append({"href": href, "label": a.get_text(strip=True)})
    logger.debug("extract_fallback_links → %d links", len(links))
    return links


def audit_fallback_links(html_text: str, tables: LocaleTables = None) -> Dict[str, Any]:
    tables = tables or DEFAULT_TABLES
    links = extract_fallback_links(html_text)
    linked = [l["href"] for l in links]

    missing = sorted(tables.site - set(linked))
    extra = sorted(set(linked) - tables.site)
    duplicates = sorted({code for code in linked if linked.count(code) > 1})

    result = {
        "links": len(links),
        "missing": missing,
        "extra": extra,
        "duplicates": duplicates,
        "ok": not (missing or extra or duplicates),
    }
    if result["ok"]:
        logger.info("Fallback list matches %d site locales", len(tables.site))
    else:
        logger.warning("Fallback list mismatch: missing=%s extra=%s duplicates=%s", missing, extra, duplicates)
    return result


def audit_page(path: str, tables: LocaleTables = None) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        result = audit_fallback_links(f.read(), tables)
    result["page"] = path
    return result
