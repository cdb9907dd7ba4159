"""
Email extraction from page markup.

Two independent scans run over every page:

* mailto scan - ``<a href="mailto:...">`` links, with the link text (or the
  text of the nearest enclosing element) as context;
* text scan - a regex over the page's visible text, with a fixed window of
  surrounding text as context.

Each scan reports an address at most once per page. Every candidate goes
through ``sanitize_email`` before it is reported.
"""

import logging
import re
from typing import List, Optional, Set
from urllib.parse import unquote

from bs4 import BeautifulSoup
from bs4.element import Tag

from email_finder.models import EmailHit, VIA_MAILTO, VIA_TEXT

# Initialize logger
log = logging.getLogger(__name__)

EMAIL_RE = re.compile(
    r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}(?:\.[a-z]{2,})?",
    re.IGNORECASE | re.ASCII,
)
MAILTO_PREFIX = "mailto:"

# Characters of page text kept on each side of a text match
CONTEXT_WINDOW = 60

# Enclosing elements tried for a mailto link with no text of its own
MAX_CONTEXT_ANCESTORS = 2

NON_VISIBLE_TAGS = ["script", "style", "template"]

IMAGE_SUFFIXES = (".png", ".jpg")
PLACEHOLDER_DOMAIN = "example.com"

_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: Optional[str]) -> Optional[str]:
    """Collapse whitespace runs to single spaces; None for empty results."""
    if not text:
        return None
    collapsed = _WS_RE.sub(" ", text).strip()
    return collapsed or None


def sanitize_email(raw: str) -> Optional[str]:
    """
    Normalise a candidate address or reject it.

    Returns:
        The trimmed, lowercased address, or None for empty input, image
        filenames that look like addresses, and placeholder addresses
    """
    email = (raw or "").strip().lower()
    if not email:
        return None
    if email.endswith(IMAGE_SUFFIXES):
        log.debug("Rejecting %r: looks like an image filename", email)
        return None
    if PLACEHOLDER_DOMAIN in email:
        log.debug("Rejecting %r: placeholder domain", email)
        return None
    return email


def snippet_around(text: str, start: int, end: int, window: int = CONTEXT_WINDOW) -> Optional[str]:
    """Whitespace-collapsed slice of ``text`` around ``[start, end)``."""
    return collapse_whitespace(text[max(0, start - window):end + window])


class EmailExtractor:
    """Finds addresses in one page of HTML."""

    def extract_from_html(self, html: str, url: str) -> List[EmailHit]:
        """
        Run both scans over a page.

        Args:
            html: Page markup
            url: URL the markup was fetched from

        Returns:
            Mailto hits in document order, followed by text hits in text order
        """
        soup = BeautifulSoup(html or "", "html.parser")

        hits = self.extract_mailto(soup, url)

        for tag in soup(NON_VISIBLE_TAGS):
            tag.decompose()
        root = soup.body or soup
        hits.extend(self.extract_from_text(root.get_text(" "), url))

        log.debug("%2d emails on %s", len(hits), url)
        return hits

    def extract_mailto(self, soup: BeautifulSoup, url: str) -> List[EmailHit]:
        hits: List[EmailHit] = []
        seen: Set[str] = set()

        for anchor in soup.find_all("a", href=True):
            href = anchor["href"].strip()
            if not href.lower().startswith(MAILTO_PREFIX):
                continue

            target = unquote(href[len(MAILTO_PREFIX):].split("?", 1)[0])
            for raw in target.split(","):
                email = sanitize_email(raw)
                if not email or email in seen:
                    continue
                seen.add(email)
                hits.append(EmailHit(
                    email=email,
                    url=url,
                    context=self.mailto_context(anchor),
                    via=VIA_MAILTO,
                ))

        return hits

    @staticmethod
    def mailto_context(anchor: Tag) -> Optional[str]:
        """
        The link's own text, else the text of its nearest enclosing elements.
        """
        context = collapse_whitespace(anchor.get_text(" "))
        node = anchor
        for _ in range(MAX_CONTEXT_ANCESTORS):
            if context:
                break
            node = node.parent
            if node is None:
                break
            context = collapse_whitespace(node.get_text(" "))
        return context

    def extract_from_text(self, text: str, url: str) -> List[EmailHit]:
        """
        Extract addresses from plain text.

        Args:
            text: Visible page text
            url: Source URL recorded on each hit

        Returns:
            One hit per distinct address, in order of first appearance
        """
        hits: List[EmailHit] = []
        seen: Set[str] = set()
        if not text:
            return hits

        for match in EMAIL_RE.finditer(text):
            email = sanitize_email(match.group(0))
            if not email or email in seen:
                continue
            seen.add(email)
            hits.append(EmailHit(
                email=email,
                url=url,
                context=snippet_around(text, match.start(), match.end()),
                via=VIA_TEXT,
            ))

        return hits


# Create a global email extractor instance
email_extractor = EmailExtractor()
