"""
Error types for TruthScope

Scorers raise these; the orchestrating pipeline catches them per modality
and records them instead of aborting the whole session.
"""


class TruthScopeError(Exception):
    """Base class for all analysis errors."""


class MissingInputError(TruthScopeError):
    """Raised when an operation received no usable input."""


class InvalidEncodingError(TruthScopeError):
    """Raised when a supplied media buffer cannot be decoded to raw bytes."""
