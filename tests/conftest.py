"""Shared fixtures for the chase game tests."""

import random

import pytest

from game.chase.config import ChaseConfig
from game.chase.scores import MemoryHighScoreStore
from game.chase.session import GameSession


@pytest.fixture
def config():
    return ChaseConfig()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def session(config, store):
    return GameSession(config, store=store, rng=random.Random(1234))


def force_catch(session):
    """Drop the pursuer on the player and run one tick."""
    session.pursuer.x = session.player.x
    session.pursuer.y = session.player.y
    session.step(1.0)
