# src/chirper/domains/chirps/policy.py
"""
Chirp ownership rules.
"""

from ...core.models import Chirp


def can_mutate(acting_user_id: int, chirp: Chirp) -> bool:
    """Only the author may edit or delete a chirp."""
    return acting_user_id == chirp.user_id
