"""
Discover likely email addresses for a company domain.
"""

from email_finder.exceptions import BlockedDomain, EmailFinderError, InvalidInput
from email_finder.models import LookupFailure, LookupRequest, LookupResult
from email_finder.orchestrator import lookup, lookup_payload

__version__ = "1.0.0"

__all__ = [
    "BlockedDomain",
    "EmailFinderError",
    "InvalidInput",
    "LookupFailure",
    "LookupRequest",
    "LookupResult",
    "lookup",
    "lookup_payload",
]
