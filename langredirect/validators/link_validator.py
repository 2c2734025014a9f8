# langredirect/validators/link_validator.py
"""
Single-URL reachability check (requests, synchronous).

Result dict:
  { url, status_code, status, reason, final_url }
status in: OK, BROKEN, IGNORED_403, TIMEOUT, N/A
"""
import os
from typing import Any, Dict, Optional

import requests

from langredirect.logger import get_logger

logger = get_logger("langredirect.validators.link_validator")

REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "10"))
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36",
)
HEADERS_BASE = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def classify_status(code: Optional[int]) -> str:
    """Strict rules: 404, 410 and 5xx are BROKEN; 403 is usually bot protection."""
    if code is None:
        return "N/A"
    if code in (404, 410) or 500 <= code < 600:
        return "BROKEN"
    if code == 403:
        return "IGNORED_403"
    if code >= 400:
        return "BROKEN"
    return "OK"


def make_result(url: str, code: Optional[int], final_url: Optional[str] = None, reason: str = None) -> Dict[str, Any]:
    return {
        "url": url,
        "status_code": code,
        "status": classify_status(code),
        "reason": reason or (f"HTTP {code}" if code is not None else "no response"),
        "final_url": final_url,
    }


def check_destination(url: str, session: requests.Session = None, timeout: int = REQUEST_TIMEOUT) -> Dict[str, Any]:
    """HEAD first; servers that reject HEAD (4xx/5xx) get a GET."""
    if session is None:
        with requests.Session() as owned:
            return check_destination(url, session=owned, timeout=timeout)

    code = None
    final_url = None

    try:
        r = session.head(url, headers=HEADERS_BASE, allow_redirects=True, timeout=timeout)
        code, final_url = r.status_code, r.url
    except requests.exceptions.RequestException as e:
        logger.debug("HEAD %s failed: %s", url, e)

    if code is None or code >= 400:
        try:
            r = session.get(url, headers=HEADERS_BASE, allow_redirects=True, timeout=timeout)
            code, final_url = r.status_code, r.url
        except requests.exceptions.Timeout:
            result = make_result(url, None, reason="timeout")
            result["status"] = "TIMEOUT"
            logger.warning("%s → TIMEOUT", url)
            return result
        except requests.exceptions.RequestException as e:
            logger.warning("%s → %s", url, e)
            return make_result(url, None, reason=str(e))

    result = make_result(url, code, final_url)
    logger.info("%s → %s (%s)", url, result["status"], code)
    return result
