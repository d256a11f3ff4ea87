"""Tests for HttpPageSource."""

import pytest
import requests
from unittest.mock import patch, MagicMock

from src.adapters.http_page_source import DEFAULT_RATE_LIMITER, HttpPageSource, RateLimiter
from src.core.exceptions import (
    PageFetchError,
    PageForbiddenError,
    PageNotFoundError,
    RateLimitError,
)

URL = "https://www.reddit.com/r/test/comments/abc/my_thread/"


def mock_response(status_code=200, text="", content_type="text/html; charset=utf-8"):
    """Create a mock requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = {"Content-Type": content_type}
    resp.text = text
    resp.encoding = "utf-8"
    resp.raise_for_status = MagicMock()
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(f"HTTP {status_code}")
    return resp


def make_source(max_retries=2):
    limiter = RateLimiter(interval_sec=0)
    return HttpPageSource(URL, timeout=5, max_retries=max_retries, rate_limiter=limiter)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("src.adapters.http_page_source.time.sleep") as sleep:
        yield sleep


class TestLoad:
    def test_parses_page(self, thread_html):
        source = make_source()
        with patch.object(source._session, "get", return_value=mock_response(text=thread_html)) as get:
            page = source.load()

        assert page.title == "My Thread : r/test"
        assert page.root.query("shreddit-post").attribute("author") == "alice"
        get.assert_called_once_with(URL, timeout=5)

    def test_sends_user_agent(self):
        source = HttpPageSource(URL, user_agent="test-agent/1.0")
        assert source._session.headers["User-Agent"] == "test-agent/1.0"

    def test_describe_is_url(self):
        assert make_source().describe() == URL


class TestErrors:
    @pytest.mark.parametrize("status, error", [
        (404, PageNotFoundError),
        (403, PageForbiddenError),
    ])
    def test_status_codes_map_to_errors(self, status, error):
        source = make_source()
        with patch.object(source._session, "get", return_value=mock_response(status)):
            with pytest.raises(error):
                source.load()

    def test_rate_limit_retries_then_fails(self, no_sleep):
        source = make_source(max_retries=2)
        with patch.object(source._session, "get", return_value=mock_response(429)) as get:
            with pytest.raises(RateLimitError):
                source.load()
        assert get.call_count == 3
        assert no_sleep.call_count == 2

    def test_rate_limit_recovers(self, thread_html):
        source = make_source()
        responses = [mock_response(429), mock_response(text=thread_html)]
        with patch.object(source._session, "get", side_effect=responses):
            page = source.load()
        assert page.title == "My Thread : r/test"

    def test_connection_errors_retry_then_fail(self):
        source = make_source(max_retries=1)
        err = requests.exceptions.ConnectionError("down")
        with patch.object(source._session, "get", side_effect=err) as get:
            with pytest.raises(PageFetchError):
                source.load()
        assert get.call_count == 2

    def test_non_html_response_rejected(self):
        source = make_source()
        resp = mock_response(text="{}", content_type="application/json")
        with patch.object(source._session, "get", return_value=resp):
            with pytest.raises(PageFetchError):
                source.load()

    def test_server_error_retries(self):
        source = make_source(max_retries=1)
        with patch.object(source._session, "get", return_value=mock_response(500)) as get:
            with pytest.raises(PageFetchError):
                source.load()
        assert get.call_count == 2


class TestRateLimiter:
    def test_backoff_doubles(self):
        limiter = RateLimiter(interval_sec=2)
        assert [limiter.get_backoff_time(i) for i in range(3)] == [2, 4, 8]

    def test_back_to_back_loads_are_spaced(self, no_sleep, thread_html):
        limiter = RateLimiter(interval_sec=2)
        first = HttpPageSource(URL, rate_limiter=limiter)
        second = HttpPageSource(URL, rate_limiter=limiter)
        for source in (first, second):
            with patch.object(source._session, "get", return_value=mock_response(text=thread_html)):
                source.load()

        assert no_sleep.call_count == 1
        assert 0 < no_sleep.call_args.args[0] <= 2

    def test_sources_share_default_limiter(self):
        first = HttpPageSource(URL)
        second = HttpPageSource(URL)
        assert first._rate_limiter is second._rate_limiter is DEFAULT_RATE_LIMITER
