"""
langredirect/context.py

Everything the redirect needs from the browser, as a plain value.
The generated page reads these from `location` and `navigator`; Python code
builds one from a URL so the resolver can run without a browser.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
from urllib.parse import unquote, urlsplit

# "%" not followed by two hex digits makes decodeURIComponent throw
BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_component(value: str) -> str:
    """
    decodeURIComponent semantics: "+" stays "+", and a malformed escape
    (bad hex or invalid UTF-8) yields "" the way the page's script does.
    """
    if BAD_ESCAPE.search(value):
        return ""
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return ""


def parse_query(query: str) -> Dict[str, str]:
    """
    name -> decoded value of its first occurrence, blanks kept.
    Names are compared raw, like the page's `[?&]name=` regex.
    """
    params = {}
    for pair in query.split("&"):
        if "=" not in pair:
            continue
        name, value = pair.split("=", 1)
        if name and name not in params:
            params[name] = decode_component(value)
    return params


@dataclass(frozen=True)
class RedirectContext:
    current_host: str
    current_fragment: str = ""
    query_params: Mapping[str, str] = field(default_factory=dict)
    user_language: Optional[str] = None   # navigator.userLanguage (old IE)
    language: Optional[str] = None        # navigator.language

    @property
    def reported_locale(self) -> str:
        """First non-empty of ?lang=, userLanguage, language ("" when none)."""
        return self.query_params.get("lang") or self.user_language or self.language or ""

    @classmethod
    def from_url(cls, url: str, user_language: str = None, language: str = None) -> "RedirectContext":
        parts = urlsplit(url)
        return cls(
            current_host=parts.netloc,
            current_fragment=f"#{parts.fragment}" if parts.fragment else "",
            query_params=parse_query(parts.query),
            user_language=user_language,
            language=language,
        )
