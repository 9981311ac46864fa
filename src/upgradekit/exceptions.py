"""
Custom exceptions for upgradekit.
"""


class CompatibilityError(Exception):
    """Base class for errors that stop a compatibility check from producing a verdict."""


class ParseError(CompatibilityError, ValueError):
    """Raised when a processor string cannot be reduced to a complete identity."""

    def __init__(self, raw: str = None):
        """
        Initialize ParseError.

        Args:
            raw: Optional processor descriptive string that failed to parse
        """
        self.raw = raw
        if raw is None:
            super().__init__("Processor identity is incomplete")
        else:
            super().__init__(f"Could not identify processor from {raw!r}")


class RetrievalError(CompatibilityError):
    """Raised when a vendor page could not be fetched or its table extracted."""

    def __init__(self, url: str, reason: str = None):
        """
        Initialize RetrievalError.

        Args:
            url: Vendor page URL
            reason: Optional description of the underlying failure
        """
        self.url = url
        self.reason = reason
        message = f"Could not retrieve supported processors from {url}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnsupportedManufacturerError(CompatibilityError):
    """Raised when the processor manufacturer has no vendor table to check against."""

    def __init__(self, manufacturer: str):
        """
        Initialize UnsupportedManufacturerError.

        Args:
            manufacturer: The unrecognized manufacturer name
        """
        self.manufacturer = manufacturer
        super().__init__(f"Unsupported processor manufacturer: {manufacturer!r}")
