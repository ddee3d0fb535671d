# src/chirper/seeding.py
"""
Synthetic data for local development.

``seed_random_chirp`` posts one Faker-generated chirp as a randomly chosen
existing user. It goes through ``ChirpService.create`` so other users are
notified exactly as for a chirp posted from the web.
"""

import logging
import random
from typing import Optional

from faker import Faker

from .core.errors import NotFoundError
from .core.models import MESSAGE_MAX_LENGTH, Chirp
from .core.ports import UserStore
from .domains.chirps.services import ChirpService

logger = logging.getLogger(__name__)


def fake_message(
    faker: Faker,
    max_length: int = MESSAGE_MAX_LENGTH,
    rng: Optional[random.Random] = None,
) -> str:
    """A sentence-like message that always passes validation."""
    rng = rng or random.Random()
    message = faker.sentence(nb_words=rng.randint(6, 20)).strip()
    return message[:max_length].rstrip() or "Chirp!"


def seed_random_chirp(
    service: ChirpService,
    users: UserStore,
    rng: Optional[random.Random] = None,
    faker: Optional[Faker] = None,
    max_length: int = MESSAGE_MAX_LENGTH,
) -> Chirp:
    """
    Create one chirp for a random existing user.

    Raises:
        NotFoundError: if there are no users to chirp as
    """
    rng = rng or random.Random()
    faker = faker or Faker()

    candidates = users.list_all()
    if not candidates:
        raise NotFoundError("User")

    author = rng.choice(candidates)
    chirp = service.create(author.id, fake_message(faker, max_length, rng))
    logger.info(f"Seeded chirp {chirp.id} for user {author.id}")
    return chirp
