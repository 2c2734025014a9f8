"""
langredirect/checker.py

Destination checker:
 - Builds every URL the landing page can send a visitor to
   (each site locale, each tutorial locale, each external route)
 - Validates them concurrently (aiohttp), HEAD first with GET fallback
 - Global semaphore bounds in-flight requests
 - Writes destination_check_<timestamp>.csv and destination_check_latest.csv
 - run_checker() is the sync wrapper used by the CLI
Returns: (report_path, broken_list, all_results, duration_seconds)
"""

from __future__ import annotations

import os
import time
import csv
import json
import asyncio
from typing import List, Dict, Tuple, Any

import aiohttp
from aiohttp import ClientTimeout

from langredirect.locales.constants import TUTORIAL_FRAGMENTS
from langredirect.locales.loader import LocaleTables
from langredirect.logger import get_logger
from langredirect.page import external_routes
from langredirect.resolver import DEFAULT_TABLES, resolve_destination
from langredirect.validators.link_validator import HEADERS_BASE, make_result

logger = get_logger("langredirect.checker")

# ---------------------------------------------------------------------
# Tunables (override via environment)
# ---------------------------------------------------------------------
MAX_CONCURRENCY = int(os.getenv("MAX_CONCURRENCY", "16"))
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "10"))
REPORTS_DIR = os.path.join("data", "reports")

REPORT_FIELDS = ["url", "status", "status_code", "reason", "final_url", "timing_ms"]


def now_ms() -> float:
    return time.time() * 1000.0


# ---------------------------------------------------------------------
# Destination list
# ---------------------------------------------------------------------
def locale_landing_urls(host: str, tables: LocaleTables = None) -> List[str]:
    """Every distinct destination the resolver can produce for `host` (no anchors)."""
    tables = tables or DEFAULT_TABLES
    urls = [resolve_destination("", code, host, tables) for code in sorted(tables.site)]
    urls += [resolve_destination(TUTORIAL_FRAGMENTS[0], code, host, tables) for code in sorted(tables.tutorial)]
    urls += [resolve_destination(frag, "", host, tables) for frag in sorted(external_routes(tables))]
    # keep order, drop repeats
    return list(dict.fromkeys(urls))


# ---------------------------------------------------------------------
# Async validator
# ---------------------------------------------------------------------
async def validate_destination(session: aiohttp.ClientSession, url: str, sem: asyncio.Semaphore,
                               timeout_sec: float = REQUEST_TIMEOUT) -> Dict[str, Any]:
    start = now_ms()
    timeout = ClientTimeout(total=timeout_sec)
    async with sem:
        try:
            try:
                async with session.head(url, allow_redirects=True, timeout=timeout) as resp:
                    if resp.status < 400:
                        res = make_result(url, resp.status, str(resp.url))
                        res["timing_ms"] = round(now_ms() - start, 1)
                        logger.trace("VALID HEAD %s -> %s", url, res["status"])
                        return res
            except (aiohttp.ClientError, asyncio.TimeoutError):
                # fall through to GET
                pass

            async with session.get(url, allow_redirects=True, timeout=timeout) as resp:
                res = make_result(url, resp.status, str(resp.url))
                res["timing_ms"] = round(now_ms() - start, 1)
                logger.trace("VALID GET %s -> %s", url, res["status"])
                return res

        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError:
            res = make_result(url, None, reason="timeout")
            res["status"] = "TIMEOUT"
        except aiohttp.ClientError as exc:
            res = make_result(url, None, reason=str(exc))

        res["timing_ms"] = round(now_ms() - start, 1)
        logger.debug(json.dumps({"phase": "error", "url": url, "error": res["reason"], "t_ms": res["timing_ms"]}))
        return res


# ---------------------------------------------------------------------
# CSV writers
# ---------------------------------------------------------------------
def safe_write_csv(path: str, rows: List[Dict[str, Any]], fields: List[str]):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    try:
        with open(path, "w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=fields, extrasaction="ignore")
            writer.writeheader()
            for r in rows:
                writer.writerow({k: ("" if r.get(k) is None else r.get(k)) for k in fields})
    except OSError as exc:
        logger.exception("safe_write_csv failed %s -> %s", path, exc)


# ---------------------------------------------------------------------
# Main async runner
# ---------------------------------------------------------------------
async def run_checker_async(urls: List[str], output_dir: str = REPORTS_DIR,
                            max_concurrency: int = None) -> Tuple[str, List[Dict[str, Any]], List[Dict[str, Any]], float]:
    start = time.time()
    max_concurrency = max_concurrency or MAX_CONCURRENCY
    logger.info("run_checker_async → starting: destinations=%d max_concurrency=%d", len(urls), max_concurrency)

    sem = asyncio.Semaphore(max_concurrency)
    conn = aiohttp.TCPConnector(limit=max_concurrency, ttl_dns_cache=300)
    async with aiohttp.ClientSession(connector=conn, headers=HEADERS_BASE) as session:
        results = await asyncio.gather(*(validate_destination(session, u, sem) for u in urls))

    broken = [r for r in results if r["status"] in ("BROKEN", "TIMEOUT", "N/A")]
    duration = time.time() - start

    timestamp = time.strftime("%Y%m%d_%H%M%S")
    report_path = os.path.join(output_dir, f"destination_check_{timestamp}.csv")
    safe_write_csv(report_path, results, REPORT_FIELDS)
    safe_write_csv(os.path.join(output_dir, "destination_check_latest.csv"), results, REPORT_FIELDS)

    logger.info("run_checker_async → finished: destinations=%d broken=%d duration=%.2fs", len(results), len(broken), duration)
    return report_path, broken, list(results), duration


def run_checker(urls: List[str], output_dir: str = REPORTS_DIR,
                max_concurrency: int = None) -> Tuple[str, List[Dict[str, Any]], List[Dict[str, Any]], float]:
    """Sync wrapper: runs run_checker_async inside a fresh event loop."""
    return asyncio.run(run_checker_async(urls, output_dir, max_concurrency))
