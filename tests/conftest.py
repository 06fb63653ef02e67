# Area: Tests
"""Shared fixtures for flip6 tests."""

import random

import pytest

from flip6._deck.dealer import Dealer
from flip6._engine.action_resolver import ActionResolver
from flip6._engine.lifecycle import SessionLifecycle
from flip6._engine.state import Player, Session
from flip6._engine.turn_coordinator import TurnCoordinator


def build_session(players=2, draw_pile=None, code="ROOM"):
    """Session with connected players P1..Pn, P1 to act, and a stacked draw pile."""
    session = Session(session_id=1, code=code)
    for i in range(players):
        session.players.append(Player(
            player_id=i + 1,
            name=f"P{i + 1}",
            seat=i,
            connected=True,
            connection_id=f"conn-{i + 1}",
        ))
    if players:
        session.current_player_id = 1
        session.round_starter_id = 1
    session.draw_pile = list(draw_pile or [])
    return session


@pytest.fixture
def make_session():
    return build_session


@pytest.fixture
def dealer():
    return Dealer(rng=random.Random(7))


@pytest.fixture
def turns(dealer):
    return TurnCoordinator(dealer)


@pytest.fixture
def resolver(turns):
    return ActionResolver(turns)


@pytest.fixture
def lifecycle(resolver):
    return SessionLifecycle(resolver)
