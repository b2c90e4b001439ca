"""Shared fixtures: random sources with predictable behaviour."""

import random

import pytest


class NoShuffleRandom(random.Random):
    """Leaves lists in their original order."""

    def shuffle(self, x, *args, **kwargs):
        pass


class ReverseShuffleRandom(random.Random):
    """'Shuffles' by reversing the list in place."""

    def shuffle(self, x, *args, **kwargs):
        x.reverse()


class FixedRandom(random.Random):
    """random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def no_shuffle_rng():
    return NoShuffleRandom(0)


@pytest.fixture
def reverse_rng():
    return ReverseShuffleRandom(0)


@pytest.fixture
def fixed_rng():
    return FixedRandom
