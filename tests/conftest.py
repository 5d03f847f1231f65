"""Shared fixtures."""

import pytest

from py_sketchbook.core.alea_prng import AleaPRNG


class SequenceRandom:
    """Random source that replays a fixed list of values, cycling."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def prng():
    return AleaPRNG("test_seed")


@pytest.fixture
def sequence_random():
    return SequenceRandom
