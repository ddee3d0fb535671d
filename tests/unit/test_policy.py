# tests/unit/test_policy.py
"""
Unit tests for chirp ownership rules.
"""

from chirper.core.models import Chirp
from chirper.domains.chirps.policy import can_mutate


class TestCanMutate:
    """Only the author may edit or delete."""

    def test_author_may_mutate(self):
        chirp = Chirp(id=1, user_id=5, message="mine")
        assert can_mutate(5, chirp) is True

    def test_other_user_may_not_mutate(self):
        chirp = Chirp(id=1, user_id=5, message="mine")
        assert can_mutate(6, chirp) is False

    def test_result_depends_only_on_owner(self):
        """Message content and timestamps should not affect the decision."""
        for message in ("a", "b" * 255):
            chirp = Chirp(id=99, user_id=2, message=message)
            assert can_mutate(2, chirp) is True
            assert can_mutate(3, chirp) is False
