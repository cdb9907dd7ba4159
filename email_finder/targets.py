"""
Candidate page generation.

A fixed list of likely contact/team pages, plus a handful of paths per
user-supplied keyword, resolved against the site origin.
"""

import logging
import re
from typing import Iterable, List
from urllib.parse import urljoin

# Initialize logger
log = logging.getLogger(__name__)

DEFAULT_PATHS = (
    "/",
    "/about",
    "/about-us",
    "/team",
    "/our-team",
    "/leadership",
    "/people",
    "/contact",
    "/contact-us",
    "/support",
    "/help",
    "/press",
    "/careers",
)

KEYWORD_PATH_TEMPLATES = (
    "/{kw}",
    "/team/{kw}",
    "/contact/{kw}",
    "/departments/{kw}",
    "/people/{kw}",
)

# Hard ceiling on pages fetched per lookup
MAX_PAGES = 12

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify_keyword(keyword: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', trim hyphens."""
    return _NON_SLUG_RE.sub("-", keyword.lower()).strip("-")


def build_targets(origin: str, keywords: Iterable[str] = ()) -> List[str]:
    """
    Build the ordered, de-duplicated list of candidate URLs for a site.

    Args:
        origin: Site origin such as ``https://acme.com``
        keywords: Free-text keywords (departments, teams, ...)

    Returns:
        Absolute URLs, default paths first, then keyword paths in keyword order
    """
    # dict keeps insertion order and gives set semantics
    targets = {}

    for path in DEFAULT_PATHS:
        targets.setdefault(urljoin(origin, path), None)

    for keyword in keywords:
        slug = slugify_keyword(keyword)
        if not slug:
            log.debug("Skipping keyword %r: nothing left after sanitising", keyword)
            continue
        for template in KEYWORD_PATH_TEMPLATES:
            targets.setdefault(urljoin(origin, template.format(kw=slug)), None)

    log.debug("Built %d candidate URLs for %s", len(targets), origin)
    return list(targets)
