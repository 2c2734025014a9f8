"""
Unit tests for RedirectContext.
"""
import pytest

from langredirect.context import RedirectContext


class TestFromUrl:
    """Tests for RedirectContext.from_url"""

    def test_parts(self):
        ctx = RedirectContext.from_url("https://example.org:8443/index.html?lang=de&x=1#faq")
        assert ctx.current_host == "example.org:8443"
        assert ctx.current_fragment == "#faq"
        assert ctx.query_params == {"lang": "de", "x": "1"}

    def test_no_fragment(self):
        assert RedirectContext.from_url("https://example.org/").current_fragment == ""

    def test_empty_fragment(self):
        assert RedirectContext.from_url("https://example.org/#").current_fragment == ""

    def test_first_value_of_repeated_param(self):
        ctx = RedirectContext.from_url("https://example.org/?lang=fr&lang=de")
        assert ctx.query_params["lang"] == "fr"

    def test_percent_decoded(self):
        ctx = RedirectContext.from_url("https://example.org/?lang=zh%2Dtw")
        assert ctx.query_params["lang"] == "zh-tw"

    def test_frozen(self):
        ctx = RedirectContext.from_url("https://example.org/")
        with pytest.raises(AttributeError):
            ctx.current_host = "other.org"


class TestReportedLocale:
    """Priority: ?lang= -> userLanguage -> language"""

    def test_empty_lang_param_ignored(self):
        ctx = RedirectContext.from_url("https://example.org/?lang=", language="it-IT")
        assert ctx.reported_locale == "it-IT"

    def test_user_language(self):
        ctx = RedirectContext("example.org", user_language="ru", language="en-US")
        assert ctx.reported_locale == "ru"

    def test_nothing(self):
        assert RedirectContext("example.org").reported_locale == ""


class TestQueryDecoding:
    """?lang= is read the way the page's getURLParameter reads it"""

    @pytest.mark.parametrize("query", ["lang=%E0", "lang=%zz", "lang=de%", "lang=%C3%28"])
    def test_malformed_escape_counts_as_absent(self, query):
        ctx = RedirectContext.from_url(f"https://example.org/?{query}#faq", language="de-DE")
        assert ctx.query_params["lang"] == ""
        assert ctx.reported_locale == "de-DE"

    def test_blank_first_value_wins(self):
        ctx = RedirectContext.from_url("https://example.org/?lang=&lang=de", language="it")
        assert ctx.query_params["lang"] == ""
        assert ctx.reported_locale == "it"

    def test_plus_is_not_a_space(self):
        ctx = RedirectContext.from_url("https://example.org/?lang=a+b")
        assert ctx.query_params["lang"] == "a+b"

    def test_names_compared_raw(self):
        ctx = RedirectContext.from_url("https://example.org/?l%61ng=fr&xlang=de")
        assert "lang" not in ctx.query_params

    def test_utf8_decoded(self):
        ctx = RedirectContext.from_url("https://example.org/?lang=%C3%A9t")
        assert ctx.query_params["lang"] == "ét"
