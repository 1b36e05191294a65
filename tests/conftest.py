"""
Pytest fixtures for Werewolf game tests.
"""

import pytest
from typing import List

from werewolf.core import GameState, Judge, Notification
from werewolf.config.game_config import GameConfig
from werewolf.session import GameSession


# Seat ids of the fixed table
EMMA_WEREWOLF = 1
LUNA_WITCH = 2
USER_SEER = 3
ALEX_GUARD = 4
GRACE_HUNTER = 5
OLIVIA_CUPID = 6
JAMES_VILLAGER = 7
SOPHIE_VILLAGER = 8

TURN = 15
DAY = 30


@pytest.fixture
def game_config():
    """Test game configuration."""
    return GameConfig(
        use_judge_announcements=False,  # Disable for cleaner test output
        record_runs=False,
        random_seed=42,
    )


@pytest.fixture
def game_state(game_config):
    """Create a fresh, started game state."""
    state = GameState(game_config)
    state.start()
    return state


@pytest.fixture
def judge(game_state, game_config):
    """Create a judge instance."""
    return Judge(game_state, game_config)


@pytest.fixture
def session(game_config):
    """A session still in the lobby."""
    return GameSession(game_config)


@pytest.fixture
def started_session(session):
    """A session on night 1, cupid's turn just begun."""
    session.ready()
    return session


def advance(session: GameSession, ticks: int) -> List[Notification]:
    """Tick the session and collect everything it produced."""
    produced = []
    for _ in range(ticks):
        produced.extend(session.tick())
    return produced


def advance_to_day(session: GameSession) -> List[Notification]:
    """Run out every remaining night turn."""
    produced = []
    while session.game_state.round.phase.value == "night":
        produced.extend(session.tick())
    return produced


def drain(session: GameSession) -> List[Notification]:
    """Acknowledge everything currently queued."""
    delivered = []
    while session.current_notification() is not None:
        delivered.append(session.acknowledge_notification())
    return delivered


@pytest.fixture
def day_session(started_session):
    """A session at the start of day 1 voting, queue drained."""
    advance_to_day(started_session)
    drain(started_session)
    return started_session
