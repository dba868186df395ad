class StartupError(Exception):
    """Connection or schema problem found before serving; fatal."""


class QueryError(Exception):
    """A request-time query failed. Surfaced as HTTP 500 with the raw message."""


class RowScanError(Exception):
    """A result row could not be decoded into an id/nama record."""
