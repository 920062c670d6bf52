"""Shared setup for sample data generators."""

from __future__ import annotations

import random
from abc import ABC
from datetime import date

from dateutil.relativedelta import relativedelta
from faker import Faker


class BaseGenerator(ABC):
    """Owns the Faker instance and the random source of a generator.

    Both are private to the generator, so two generators built with the
    same seed produce the same sequence regardless of what else in the
    process draws random numbers.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``pt_BR``).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "pt_BR",
    ) -> None:
        self.rng = random.Random(seed)
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def chance(self, probability: float) -> bool:
        return self.rng.random() < probability

    def month_offset(self, anchor: date, earliest: int, latest: int) -> date:
        """Random day (1-28) of a month ``earliest`` to ``latest`` months after ``anchor``."""
        return anchor + relativedelta(
            months=self.rng.randint(earliest, latest),
            day=self.rng.randint(1, 28),
        )
