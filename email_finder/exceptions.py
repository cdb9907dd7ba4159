"""
Exceptions raised by the lookup core before any crawling starts.
"""


class EmailFinderError(Exception):
    """Base class for lookup errors."""
    pass


class InvalidInput(EmailFinderError):
    """Raised for an empty, badly typed or unparseable request."""
    pass


class BlockedDomain(EmailFinderError):
    """Raised when a placeholder domain such as example.com is supplied."""
    pass
