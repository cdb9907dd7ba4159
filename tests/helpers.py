"""
Shared fakes for the test suite.
"""

from typing import Dict, Optional
from unittest.mock import MagicMock

from email_finder.models import CrawlOutcome


def fake_response(
    status: int = 200,
    body: bytes = b"",
    content_type: str = "text/html; charset=utf-8",
    encoding: Optional[str] = "utf-8",
    url: str = "https://acme.com/",
) -> MagicMock:
    """A streamed ``requests.Response`` stand-in."""
    response = MagicMock()
    response.status_code = status
    response.headers = {"Content-Type": content_type}
    response.encoding = encoding
    response.url = url
    response.iter_content.return_value = [body] if body else []
    return response


class FakeClient:
    """HttpClient stand-in serving canned pages; every other URL is a 404."""

    def __init__(self, pages: Optional[Dict[str, str]] = None, failures: Optional[Dict[str, CrawlOutcome]] = None):
        self.pages = pages or {}
        self.failures = failures or {}
        self.fetched = []
        self.session = MagicMock()

    def new_session(self):
        return self.session

    def fetch_page(self, url, session=None):
        self.fetched.append(url)
        if url in self.failures:
            return self.failures[url]
        if url in self.pages:
            return CrawlOutcome(url=url, ok=True, status=200, body=self.pages[url])
        return CrawlOutcome(url=url, ok=False, status=404, error="Request failed with status 404")
