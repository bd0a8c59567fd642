"""Custom exceptions for RMV transit search."""


class TransitSearchError(Exception):
    """Base exception for transit search errors."""

    pass


class ParseError(TransitSearchError):
    """Raised when a page does not have the structure its dialect expects.

    This always means the provider's data format has changed and the dialect
    needs maintenance. ``excerpt`` holds the offending raw text and ``source``
    the URI (or other identifier) of the page it came from.
    """

    def __init__(
        self, message: str, excerpt: str | None = None, source: str | None = None
    ):
        super().__init__(message)
        self.excerpt = excerpt
        self.source = source


class BlockParseError(ParseError):
    """Raised when a block matches the coarse pattern but not the fine one."""

    def __init__(self, block: str, source: str | None = None):
        super().__init__(f"cannot parse '{block}' on {source}", block, source)


class LineFormatError(ParseError):
    """Raised when a line label has an unknown transport mode."""

    pass


class UnknownRoleError(ParseError):
    """Raised when an ambiguity section is tagged with an unknown role."""

    pass


class NetworkError(TransitSearchError):
    """Raised when there's a network-related error."""

    pass


class ValidationError(TransitSearchError):
    """Raised when input validation fails."""

    pass
