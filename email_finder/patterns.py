"""
Naming-convention guesses.

Role mailboxes (info@, sales@, ...) are always suggested as display-only
ideas. When both a first and a last name are known, seven common personal
conventions are also produced as candidate addresses.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from email_finder.relevance import GENERIC_PREFIXES

# Initialize logger
log = logging.getLogger(__name__)

_NON_LETTER_RE = re.compile(r"[^a-z]")

NAMED_PATTERNS = (
    ("first.last", lambda f, l: f"{f}.{l}"),
    ("firstlast",  lambda f, l: f"{f}{l}"),
    ("f.last",     lambda f, l: f"{f[0]}.{l}"),
    ("first",      lambda f, l: f),
    ("last",       lambda f, l: l),
    ("firstl",     lambda f, l: f"{f}{l[0]}"),
    ("flast",      lambda f, l: f"{f[0]}{l}"),
)


@dataclass(frozen=True)
class PatternCandidate:
    email: str
    label: str
    description: str


@dataclass(frozen=True)
class PatternSuggestions:
    labels: Tuple[str, ...]
    candidates: Tuple[PatternCandidate, ...]


def clean_name(name: Optional[str]) -> str:
    """Lowercase and keep ASCII letters only."""
    return _NON_LETTER_RE.sub("", (name or "").lower())


def build_pattern_suggestions(
    host: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> PatternSuggestions:
    """
    Build pattern ideas for a host.

    Args:
        host: Normalised host, e.g. ``acme.com``
        first_name: Optional first name of a person at the company
        last_name: Optional last name of a person at the company

    Returns:
        PatternSuggestions with every suggested address in ``labels``
        (de-duplicated, generic first) and the named guesses in ``candidates``
    """
    domain = host.lower()
    labels: List[str] = [f"{prefix}@{domain}" for prefix in GENERIC_PREFIXES]
    candidates: List[PatternCandidate] = []

    first = clean_name(first_name)
    last = clean_name(last_name)

    if first and last:
        for name, build in NAMED_PATTERNS:
            email = f"{build(first, last)}@{domain}"
            labels.append(email)
            candidates.append(PatternCandidate(
                email=email,
                label=f"Pattern: {name}",
                description=f"Guessed using {name} naming convention.",
            ))
    elif first or last:
        log.debug("Only one of first/last name given; skipping named patterns")

    return PatternSuggestions(
        labels=tuple(dict.fromkeys(labels)),
        candidates=tuple(candidates),
    )
