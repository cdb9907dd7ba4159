"""
Relevance filtering of extracted addresses.
"""

import logging
from typing import Iterable, List

from email_finder.domain import BLOCKED_DOMAINS
from email_finder.models import EmailHit

# Initialize logger
log = logging.getLogger(__name__)

# Role mailboxes kept even when they sit on a third-party domain
GENERIC_PREFIXES = (
    "hello",
    "hi",
    "info",
    "contact",
    "support",
    "press",
    "partnerships",
    "careers",
    "sales",
)


def split_email(email: str):
    local, _, domain = email.partition("@")
    return local, domain


def is_relevant(email: str, host: str) -> bool:
    """
    Decide whether an address belongs to the site being looked up.

    An address on a placeholder domain is always dropped. One whose domain
    contains ``host`` as a substring is kept (this admits subdomains, and also
    unrelated domains such as ``notacme.com`` for ``acme.com``). Anything else
    is kept only when its local part is a generic role prefix.
    """
    local, domain = split_email(email)
    if domain in BLOCKED_DOMAINS:
        return False
    if host in domain:
        return True
    return local in GENERIC_PREFIXES


def filter_relevant(hits: Iterable[EmailHit], host: str) -> List[EmailHit]:
    kept = []
    for hit in hits:
        if is_relevant(hit.email, host):
            kept.append(hit)
        else:
            log.debug("Dropping %s from %s: unrelated to %s", hit.email, hit.url, host)
    return kept
