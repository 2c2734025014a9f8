"""
Unit tests for the synchronous destination check.
Network calls are replaced with a mocked requests.Session.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from langredirect.validators import link_validator
from langredirect.validators.link_validator import check_destination, classify_status


def response(code, url="https://example.org/de"):
    r = MagicMock()
    r.status_code = code
    r.url = url
    return r


class TestClassifyStatus:
    """Tests for classify_status"""

    @pytest.mark.parametrize("code,status", [
        (200, "OK"),
        (301, "OK"),
        (403, "IGNORED_403"),
        (404, "BROKEN"),
        (410, "BROKEN"),
        (429, "BROKEN"),
        (503, "BROKEN"),
        (None, "N/A"),
    ])
    def test_codes(self, code, status):
        assert classify_status(code) == status


class TestCheckDestination:
    """Tests for check_destination"""

    def test_head_ok(self):
        session = MagicMock()
        session.head.return_value = response(200)
        result = check_destination("https://example.org/de", session=session)
        assert result["status"] == "OK"
        assert result["final_url"] == "https://example.org/de"
        session.get.assert_not_called()

    def test_head_rejected_get_ok(self):
        session = MagicMock()
        session.head.return_value = response(405)
        session.get.return_value = response(200)
        result = check_destination("https://example.org/de", session=session)
        assert result["status"] == "OK"
        assert result["status_code"] == 200

    def test_get_404(self):
        session = MagicMock()
        session.head.side_effect = requests.exceptions.ConnectionError("refused")
        session.get.return_value = response(404)
        result = check_destination("https://example.org/xx", session=session)
        assert result["status"] == "BROKEN"
        assert result["reason"] == "HTTP 404"

    def test_timeout(self):
        session = MagicMock()
        session.head.side_effect = requests.exceptions.Timeout()
        session.get.side_effect = requests.exceptions.Timeout()
        result = check_destination("https://example.org/de", session=session)
        assert result["status"] == "TIMEOUT"
        assert result["status_code"] is None

    def test_connection_error(self):
        session = MagicMock()
        session.head.side_effect = requests.exceptions.ConnectionError("refused")
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        result = check_destination("https://example.org/de", session=session)
        assert result["status"] == "N/A"
        assert "refused" in result["reason"]

    def test_owned_session_closed(self):
        with patch.object(link_validator.requests, "Session") as session_cls:
            owned = session_cls.return_value.__enter__.return_value
            owned.head.return_value = response(200)
            result = check_destination("https://example.org/de")
        assert result["status"] == "OK"
        owned.head.assert_called_once()
        session_cls.return_value.__exit__.assert_called_once()

    def test_passed_session_left_open(self):
        session = MagicMock()
        session.head.return_value = response(200)
        check_destination("https://example.org/de", session=session)
        session.close.assert_not_called()
        session.__exit__.assert_not_called()
