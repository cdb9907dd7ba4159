"""
Lookup orchestration.

Runs one lookup end to end: normalise the domain, build candidate pages,
fetch them one at a time, extract and filter addresses page by page, then
merge in naming-convention guesses and produce the ordered result.
"""

import logging
import time
from collections import Counter
from typing import Any, Dict, Optional, Tuple, Union

from email_finder.aggregator import (
    CONFIDENCE_WEIGHTS,
    EvidenceAggregator,
    build_reason,
    resolve_confidence,
)
from email_finder.domain import normalise_domain
from email_finder.email_extractor import EmailExtractor, email_extractor
from email_finder.exceptions import EmailFinderError
from email_finder.http import HttpClient, http_client
from email_finder.models import (
    CrawlSummary,
    EmailResult,
    EmailSource,
    LookupFailure,
    LookupRequest,
    LookupResult,
    VIA_PATTERN,
)
from email_finder.patterns import PatternSuggestions, build_pattern_suggestions
from email_finder.relevance import filter_relevant
from email_finder.targets import MAX_PAGES, build_targets

# Initialize logger
log = logging.getLogger(__name__)

LookupOutcome = Union[LookupResult, LookupFailure]


def assemble_results(
    aggregator: EvidenceAggregator,
    suggestions: PatternSuggestions,
) -> Tuple[EmailResult, ...]:
    """
    Merge pattern guesses into the aggregate and build the final result list.

    Guesses for addresses already found on the site are not added again.

    Returns:
        Results ordered by confidence (high first), then by address
    """
    for candidate in suggestions.candidates:
        if candidate.email in aggregator:
            continue
        aggregator.register(candidate.email, EmailSource(
            url=candidate.label,
            context=candidate.description,
            via=VIA_PATTERN,
        ))

    results = [
        EmailResult(
            email=entry.email,
            confidence=resolve_confidence(entry),
            reason=build_reason(entry),
            sources=tuple(entry.sources),
        )
        for entry in aggregator.entries()
    ]
    results.sort(key=lambda r: (-CONFIDENCE_WEIGHTS[r.confidence], r.email))
    return tuple(results)


class Orchestrator:
    """Runs lookups. Holds no per-lookup state between calls."""

    def __init__(
        self,
        client: Optional[HttpClient] = None,
        extractor: Optional[EmailExtractor] = None,
    ):
        self.http_client = client or http_client
        self.extractor = extractor or email_extractor

    def lookup(self, request: LookupRequest) -> LookupOutcome:
        """
        Run one lookup.

        Args:
            request: Validated lookup request

        Returns:
            LookupResult, or LookupFailure when the domain is rejected before
            any page is fetched
        """
        start_time = time.time()

        try:
            normalized = normalise_domain(request.domain)
        except EmailFinderError as e:
            log.warning("Rejected lookup for %r: %s", request.domain, e)
            return LookupFailure(message=str(e))

        targets = build_targets(normalized.origin, request.keywords)[:MAX_PAGES]
        log.info("▶ Looking up %s (%d pages)", normalized.host, len(targets))

        stats = Counter()
        aggregator = EvidenceAggregator()
        crawled = []

        session = self.http_client.new_session()
        try:
            for url in targets:
                outcome = self.http_client.fetch_page(url, session)
                crawled.append(CrawlSummary.from_outcome(outcome))

                if not outcome.ok:
                    stats["pages_failed"] += 1
                    log.debug("Skipping %s: %s", url, outcome.error)
                    continue
                stats["pages_ok"] += 1
                if not outcome.body:
                    continue

                hits = self.extractor.extract_from_html(outcome.body, url)
                accepted = filter_relevant(hits, normalized.host)
                stats["hits"] += aggregator.add_hits(accepted)
        finally:
            session.close()

        suggestions = build_pattern_suggestions(
            normalized.host, request.first_name, request.last_name
        )
        results = assemble_results(aggregator, suggestions)

        tiers = Counter(r.confidence for r in results)
        log.info(
            "✓ %s: %d/%d pages ok, %d results (high %d, medium %d, low %d) in %.2fs",
            normalized.host,
            stats["pages_ok"],
            len(crawled),
            len(results),
            tiers["high"],
            tiers["medium"],
            tiers["low"],
            time.time() - start_time,
        )

        return LookupResult(
            domain=normalized.host,
            results=results,
            patterns=suggestions.labels,
            crawled=tuple(crawled),
        )

    def lookup_payload(self, payload: Any) -> Dict[str, Any]:
        """
        Validate a JSON-style payload, run the lookup and return its wire shape.
        """
        try:
            request = LookupRequest.from_payload(payload)
        except EmailFinderError as e:
            log.warning("Invalid lookup payload: %s", e)
            return LookupFailure(message=str(e)).to_dict()
        return self.lookup(request).to_dict()


# Create a global orchestrator instance
orchestrator = Orchestrator()


def lookup(request: LookupRequest) -> LookupOutcome:
    return orchestrator.lookup(request)


def lookup_payload(payload: Any) -> Dict[str, Any]:
    return orchestrator.lookup_payload(payload)
