"""
Exception types for knotapel.

Polynomial arithmetic and braid-word parsing never raise; the errors
below are reserved for inputs that describe an impossible braid or a
state sum that is too large to enumerate.
"""


class KnotapelError(Exception):
    """Base class for all knotapel errors."""


class InvalidTopologyError(KnotapelError, ValueError):
    """A braid word references a strand column that does not exist."""


class StateSumTooLargeError(KnotapelError, ValueError):
    """A bracket state sum was requested for too many crossings."""
