"""
Page fetching.

One GET per candidate URL, bounded to a fixed 10 seconds end to end, with no
retries and no caching. ``HttpClient.fetch_page`` never raises: every outcome
(status error, timeout, network failure, success) comes back as a
``CrawlOutcome``.
"""

from __future__ import annotations

import codecs
import logging
import os
import time
from typing import Optional
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
import urllib3
from urllib3.exceptions import InsecureRequestWarning, ReadTimeoutError

from email_finder.config import config
from email_finder.models import CrawlOutcome

log = logging.getLogger(__name__)

logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)

FETCH_TIMEOUT = 10.0
CHUNK_SIZE = 64 * 1024

ACCEPT_HTML = "text/html,application/xhtml+xml"
TIMEOUT_MESSAGE = "Request timed out"
UNKNOWN_ERROR_MESSAGE = "Unknown fetch error"


def _body_encoding(response: requests.Response) -> str:
    # requests falls back to ISO-8859-1 for text/* without a charset
    content_type = response.headers.get("Content-Type", "").lower()
    encoding = response.encoding if "charset" in content_type else None
    if not encoding:
        return "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        log.debug("Unknown charset %r for %s, decoding as utf-8", encoding, response.url)
        return "utf-8"
    return encoding


class HttpClient:
    """Bounded-time page fetcher."""

    def __init__(self, timeout: float = FETCH_TIMEOUT) -> None:
        self.timeout = timeout

    def new_session(self) -> requests.Session:
        """
        Build a fresh session for one lookup.

        Sessions are never shared between lookups, so cookies picked up on one
        site cannot leak into another lookup.
        """
        s = requests.Session()
        s.headers.update({
            "User-Agent": config.user_agent,
            "Accept": ACCEPT_HTML,
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        })
        adapter = HTTPAdapter(max_retries=0)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        s.max_redirects = config.max_redirects
        s.verify = not config.insecure_ssl
        if config.insecure_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
        return s

    def fetch_page(self, url: str, session: Optional[requests.Session] = None) -> CrawlOutcome:
        """
        Fetch one page.

        Args:
            url: Absolute URL to fetch
            session: Session to reuse; a throwaway one is used when omitted

        Returns:
            CrawlOutcome. ``body`` is only set when ``ok`` is True.
        """
        own_session = session is None
        sess = self.new_session() if own_session else session
        deadline = time.monotonic() + self.timeout

        try:
            response = sess.get(url, timeout=self.timeout, stream=True, allow_redirects=True)
            try:
                status = response.status_code
                log.info("HTTP GET %s -> %s", url, status)

                if not 200 <= status < 300:
                    return CrawlOutcome(
                        url=url,
                        ok=False,
                        status=status,
                        error=f"Request failed with status {status}",
                    )

                body = self._read_body(response, deadline)
            finally:
                response.close()

        except requests.Timeout as err:
            log.warning("Timed out fetching %s: %s", url, err)
            return CrawlOutcome(url=url, ok=False, status=None, error=TIMEOUT_MESSAGE)

        except requests.RequestException as err:
            log.warning("Fetch failed for %s: %s", url, err)
            return CrawlOutcome(url=url, ok=False, status=None, error=str(err) or UNKNOWN_ERROR_MESSAGE)

        except Exception as err:
            log.warning("Unexpected error fetching %s: %r", url, err)
            return CrawlOutcome(url=url, ok=False, status=None, error=str(err) or UNKNOWN_ERROR_MESSAGE)

        finally:
            if own_session:
                sess.close()

        if config.debug:
            self._dump_debug(url, body)

        return CrawlOutcome(url=url, ok=True, status=status, body=body)

    def _read_body(self, response: requests.Response, deadline: float) -> str:
        """
        Read the streamed body, enforcing the fetch deadline and size cap.

        Raises:
            requests.Timeout: If the deadline passes or a socket read times out
        """
        chunks = []
        size = 0
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise requests.Timeout(f"Reading body of {response.url} took longer than {self.timeout}s")
                if not chunk:
                    continue
                chunks.append(chunk)
                size += len(chunk)
                if size >= config.max_body_bytes:
                    log.warning("Body of %s exceeds %d bytes, truncating", response.url, config.max_body_bytes)
                    break
        except requests.ConnectionError as err:
            # requests wraps a socket read timeout during streaming as ConnectionError
            if err.args and isinstance(err.args[0], ReadTimeoutError):
                raise requests.Timeout(str(err)) from err
            raise

        raw = b"".join(chunks)[:config.max_body_bytes]
        return raw.decode(_body_encoding(response), errors="replace")

    def _dump_debug(self, url: str, body: str) -> None:
        try:
            os.makedirs(config.debug_dir, exist_ok=True)
            p = urlparse(url)
            host = p.netloc.replace(":", "_") or "_"
            path = p.path.strip("/").replace("/", "_") or "index"
            fname = f"{host}_{path}.html"
            with open(os.path.join(config.debug_dir, fname), "w", encoding="utf-8") as fp:
                fp.write(body)
            log.debug("Saved debug dump for %s -> %s", url, fname)
        except OSError as exc:
            log.warning("Failed to save debug dump for %s: %s", url, exc)


# single, shared instance
http_client = HttpClient()
