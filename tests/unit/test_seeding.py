# tests/unit/test_seeding.py
"""
Unit tests for synthetic chirp seeding.
"""

import random

import pytest
from faker import Faker

from chirper.core.errors import NotFoundError
from chirper.seeding import fake_message, seed_random_chirp


class TestFakeMessage:
    """Tests for fake_message."""

    def test_message_fits_max_length(self):
        faker = Faker()
        Faker.seed(1234)
        rng = random.Random(1)

        for _ in range(20):
            message = fake_message(faker, max_length=40, rng=rng)
            assert 0 < len(message) <= 40
            assert message == message.strip()


class TestSeedRandomChirp:
    """Tests for seed_random_chirp."""

    def test_no_users_raises(self, service, user_store):
        with pytest.raises(NotFoundError):
            seed_random_chirp(service, user_store)

    def test_chirp_belongs_to_existing_user(self, service, user_store, chirp_store, make_user):
        users = [make_user() for _ in range(3)]

        chirp = seed_random_chirp(service, user_store, rng=random.Random(7))

        assert chirp.user_id in {u.id for u in users}
        assert chirp_store.count() == 1

    def test_seeded_chirp_notifies_other_users(self, service, user_store, notifications_repo, make_user):
        """Seeding goes through the normal create path, so notifications fan out."""
        users = [make_user() for _ in range(3)]

        chirp = seed_random_chirp(service, user_store, rng=random.Random(3))

        for user in users:
            expected = 0 if user.id == chirp.user_id else 1
            assert notifications_repo.unread_count(user.id) == expected
