# src/chirper/domains/chirps/constants.py
"""
Chirps Domain Constants
"""

from ...core.models import MESSAGE_MAX_LENGTH

MESSAGE_MIN_LENGTH = 1

MESSAGE_REQUIRED = "The message field is required."
MESSAGE_NOT_STRING = "The message must be a string."
MESSAGE_TOO_LONG = "The message must not be greater than {max_length} characters."

UNKNOWN_AUTHOR = "Unknown"

__all__ = [
    "MESSAGE_MAX_LENGTH",
    "MESSAGE_MIN_LENGTH",
    "MESSAGE_REQUIRED",
    "MESSAGE_NOT_STRING",
    "MESSAGE_TOO_LONG",
    "UNKNOWN_AUTHOR",
]
