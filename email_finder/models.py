"""
Data model for a single lookup.

Every object here lives for the duration of one lookup only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from email_finder.exceptions import InvalidInput

VIA_MAILTO = "mailto"
VIA_TEXT = "text"
VIA_PATTERN = "pattern"

CONFIDENCE_HIGH = "high"
CONFIDENCE_MEDIUM = "medium"
CONFIDENCE_LOW = "low"

MIN_DOMAIN_LENGTH = 3


@dataclass(frozen=True)
class NormalizedDomain:
    origin: str
    host: str


@dataclass(frozen=True)
class LookupRequest:
    """Validated lookup input. Names are optional; keywords default to empty."""

    domain: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    keywords: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "LookupRequest":
        """
        Build a request from a JSON-style payload.

        Args:
            payload: Mapping with ``domain`` and optional ``firstName``,
                ``lastName`` and ``keywords`` keys

        Returns:
            LookupRequest

        Raises:
            InvalidInput: If a field is missing or has the wrong type
        """
        if not isinstance(payload, Mapping):
            raise InvalidInput("Invalid request payload")

        domain = payload.get("domain")
        if not isinstance(domain, str) or len(domain) < MIN_DOMAIN_LENGTH:
            raise InvalidInput("Domain is required")

        names = {}
        for key in ("firstName", "lastName"):
            value = payload.get(key)
            if value is not None and not isinstance(value, str):
                raise InvalidInput(f"{key} must be a string")
            names[key] = value

        keywords = payload.get("keywords")
        if keywords is None:
            keywords = []
        if not isinstance(keywords, (list, tuple)) or not all(
            isinstance(k, str) for k in keywords
        ):
            raise InvalidInput("keywords must be a list of strings")

        return cls(
            domain=domain,
            first_name=names["firstName"],
            last_name=names["lastName"],
            keywords=tuple(keywords),
        )


@dataclass
class CrawlOutcome:
    url: str
    ok: bool
    status: Optional[int]
    error: Optional[str] = None
    body: Optional[str] = None


@dataclass(frozen=True)
class EmailSource:
    url: str
    context: Optional[str]
    via: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "context": self.context, "via": self.via}


@dataclass(frozen=True)
class EmailHit:
    """One address found on one page by one scan."""

    email: str
    url: str
    context: Optional[str]
    via: str

    def source(self) -> EmailSource:
        return EmailSource(url=self.url, context=self.context, via=self.via)


@dataclass
class AggregatedEmail:
    email: str
    sources: List[EmailSource] = field(default_factory=list)
    mailto_count: int = 0
    text_count: int = 0
    pattern_count: int = 0


@dataclass(frozen=True)
class EmailResult:
    email: str
    confidence: str
    reason: str
    sources: Tuple[EmailSource, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "confidence": self.confidence,
            "reason": self.reason,
            "sources": [s.to_dict() for s in self.sources],
        }


@dataclass(frozen=True)
class CrawlSummary:
    url: str
    status: Optional[int]
    ok: bool
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: CrawlOutcome) -> "CrawlSummary":
        return cls(url=outcome.url, status=outcome.status, ok=outcome.ok, error=outcome.error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url, "ok": self.ok, "status": self.status}
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class LookupResult:
    domain: str
    results: Tuple[EmailResult, ...]
    patterns: Tuple[str, ...]
    crawled: Tuple[CrawlSummary, ...]
    success: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "domain": self.domain,
            "results": [r.to_dict() for r in self.results],
            "patterns": list(self.patterns),
            "crawled": [c.to_dict() for c in self.crawled],
        }


@dataclass(frozen=True)
class LookupFailure:
    message: str
    success: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message}
