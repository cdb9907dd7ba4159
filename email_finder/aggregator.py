"""
Cross-page evidence aggregation and confidence scoring.
"""

import logging
from typing import Dict, Iterable, List

from email_finder.models import (
    AggregatedEmail,
    EmailHit,
    EmailSource,
    CONFIDENCE_HIGH,
    CONFIDENCE_LOW,
    CONFIDENCE_MEDIUM,
    VIA_MAILTO,
    VIA_PATTERN,
    VIA_TEXT,
)

# Initialize logger
log = logging.getLogger(__name__)

CONFIDENCE_WEIGHTS = {
    CONFIDENCE_HIGH: 2,
    CONFIDENCE_MEDIUM: 1,
    CONFIDENCE_LOW: 0,
}

_COUNTERS = {
    VIA_MAILTO: "mailto_count",
    VIA_TEXT: "text_count",
    VIA_PATTERN: "pattern_count",
}


class EvidenceAggregator:
    """
    One entry per address, fed page by page during a single lookup.

    Entries are never removed and keep the order in which addresses were
    first seen.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, AggregatedEmail] = {}

    def __contains__(self, email: str) -> bool:
        return email in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, email: str) -> AggregatedEmail:
        return self._entries[email]

    def register(self, email: str, source: EmailSource) -> AggregatedEmail:
        """
        Record one discovery event for ``email``.

        Raises:
            ValueError: If ``source.via`` is not a known discovery method
        """
        counter = _COUNTERS.get(source.via)
        if counter is None:
            raise ValueError(f"Unknown discovery method: {source.via!r}")

        entry = self._entries.get(email)
        if entry is None:
            entry = AggregatedEmail(email=email)
            self._entries[email] = entry

        entry.sources.append(source)
        setattr(entry, counter, getattr(entry, counter) + 1)
        return entry

    def add_hits(self, hits: Iterable[EmailHit]) -> int:
        count = 0
        for hit in hits:
            self.register(hit.email, hit.source())
            count += 1
        return count

    def entries(self) -> List[AggregatedEmail]:
        return list(self._entries.values())


def resolve_confidence(entry: AggregatedEmail) -> str:
    """high for any mailto evidence, medium for text-only, low otherwise."""
    if entry.mailto_count > 0:
        return CONFIDENCE_HIGH
    if entry.text_count > 0:
        return CONFIDENCE_MEDIUM
    return CONFIDENCE_LOW


def build_reason(entry: AggregatedEmail) -> str:
    parts = []
    if entry.mailto_count > 0:
        noun = "link" if entry.mailto_count == 1 else "links"
        parts.append(f"{entry.mailto_count} mailto {noun}")
    if entry.text_count > 0:
        parts.append("page text extraction")

    if not parts:
        return "Pattern generated from company naming conventions."
    return f"Based on {' and '.join(parts)}."
