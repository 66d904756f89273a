"""Exceptions raised by the query transport and the oracle client.

The price service is the only layer that catches these; everything below it
propagates.
"""


class OracleError(Exception):
    """Base exception for oracle price queries."""


class OracleTransportError(OracleError):
    """Raised when a contract query cannot be delivered or the gateway rejects it."""


class OracleDecodeError(OracleError):
    """Raised when a query response or rate value cannot be decoded."""
