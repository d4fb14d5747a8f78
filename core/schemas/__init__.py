"""
Shared schemas.

Currently only the error taxonomy lives here.
"""

from .errors import (
    ErrorCodes,
    ReserveError,
    ReserveException,
    ItemNotFoundException,
    InvalidEncodingException,
    ConfigurationException,
)

__all__ = [
    "ErrorCodes",
    "ReserveError",
    "ReserveException",
    "ItemNotFoundException",
    "InvalidEncodingException",
    "ConfigurationException",
]
