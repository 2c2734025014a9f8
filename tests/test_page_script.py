"""
Runs the generated page's inline script in V8 (mini-racer) with a fake
`window`, and checks it lands where the Python resolver says it should.
"""
import json
from urllib.parse import urlsplit

import pytest
from bs4 import BeautifulSoup

from langredirect.analytics.matrix_builder import build_resolution_matrix
from langredirect.context import RedirectContext
from langredirect.page import render_redirect_page
from langredirect.resolver import find_destination

py_mini_racer = pytest.importorskip("py_mini_racer")

HOST = "h.example"

HARNESS = """(function () {
  var target = null;
  var window = {
    location: {
      host: %(host)s,
      search: %(search)s,
      hash: %(hash)s,
      replace: function (url) { target = url; }
    },
    navigator: {userLanguage: %(user_language)s, language: %(language)s}
  };
  %(script)s
  return target;
})()"""


@pytest.fixture(scope="module")
def js():
    return py_mini_racer.MiniRacer()


@pytest.fixture(scope="module")
def page_script():
    page = render_redirect_page()
    return BeautifulSoup(page, "html.parser").find("script").string


def run_page(js, script, url, user_language=None, language=None):
    parts = urlsplit(url)
    return js.eval(HARNESS % {
        "host": json.dumps(parts.netloc),
        "search": json.dumps(f"?{parts.query}" if parts.query else ""),
        "hash": json.dumps(f"#{parts.fragment}" if parts.fragment else ""),
        "user_language": json.dumps(user_language),
        "language": json.dumps(language),
        "script": script,
    })


class TestScriptMatchesResolver:
    """The page's findDestination agrees with find_destination"""

    def test_every_matrix_row(self, js, page_script):
        df = build_resolution_matrix(HOST)
        for row in df.itertuples():
            url = f"https://{HOST}/{row.fragment}"
            assert run_page(js, page_script, url, language=row.reported_locale) == row.destination, row

    @pytest.mark.parametrize("url,user_language,language", [
        ("https://h.example/?lang=fr#privacy", None, "de"),
        ("https://h.example/?lang=%E0#faq", None, "de-DE"),
        ("https://h.example/?lang=%zz", "it", None),
        ("https://h.example/?lang=&lang=de", None, "it"),
        ("https://h.example/?lang=", None, "pt-BR"),
        ("https://h.example/?x=1&lang=km-KH#tutorial", None, "de"),
        ("https://h.example/?lang=km#faq", None, None),
        ("https://h.example/?xlang=fr", None, "ru"),
        ("https://h.example/?lang=a+b", None, "es"),
        ("https://h.example/?lang=%64%65#changelog", None, None),
        ("https://h.example/#tutorial_class", "es-ES", "fr"),
        ("https://h.example/#paypal", None, "ja"),
        ("https://h.example/", None, None),
    ])
    def test_query_and_browser_languages(self, js, page_script, url, user_language, language):
        expected = find_destination(RedirectContext.from_url(url, user_language=user_language, language=language))
        assert run_page(js, page_script, url, user_language, language) == expected

    def test_malformed_lang_still_redirects(self, js, page_script):
        url = "https://h.example/?lang=%E0#faq"
        assert run_page(js, page_script, url, language="de-DE") == "https://h.example/de#faq"
