"""
Tests for the session API: lobby, ticking, queue acknowledgement and teardown.
"""

import threading
from unittest.mock import Mock

from werewolf.core import GamePhase, Role, NotificationType
from werewolf.session import GameSession
from conftest import (
    advance, advance_to_day, drain, DAY, TURN,
    EMMA_WEREWOLF, LUNA_WITCH, USER_SEER, ALEX_GUARD, GRACE_HUNTER,
    OLIVIA_CUPID, JAMES_VILLAGER, SOPHIE_VILLAGER,
)


def test_lobby_countdown_starts_game(session, game_config):
    assert not session.started
    advance(session, game_config.game_start_countdown - 1)
    assert not session.started
    assert session.state()["lobby_countdown"] == 1

    produced = advance(session, 1)
    assert session.started
    assert session.game_state.round.current_turn == Role.CUPID
    assert produced[0].title == "Cupid's Turn"


def test_ready_skips_countdown(session):
    session.ready()
    assert session.started
    assert session.ready() == []


def test_no_round_progress_in_lobby(session):
    advance(session, 5)
    assert session.game_state.round.current_turn is None
    assert session.current_notification() is None


def test_set_user_display_name(session):
    assert session.set_user_display_name("Morgan") == "Morgan"
    assert session.game_state.roster.user.name == "Morgan"
    assert session.set_user_display_name("") == "PlayerX"


def test_acknowledge_pops_in_order(started_session):
    advance(started_session, TURN)
    first = started_session.acknowledge_notification()
    second = started_session.acknowledge_notification()
    third = started_session.acknowledge_notification()
    assert [first.type, second.type, third.type] == [
        NotificationType.TURN_CHANGE, NotificationType.LOVERS_FORMED, NotificationType.TURN_CHANGE,
    ]
    assert started_session.acknowledge_notification() is None


def test_acknowledging_game_over_tears_down(game_config):
    leave = Mock()
    session = GameSession(game_config, on_leave_game=leave)
    session.ready()
    session.mark_player_dead(EMMA_WEREWOLF)

    delivered = drain(session)
    assert delivered[-1].type == NotificationType.GAME_OVER
    leave.assert_called_once()
    assert session.closed
    assert session.tick() == []
    assert session.cast_vote(ALEX_GUARD, LUNA_WITCH) == []


def test_teardown_discards_pending_pairing(started_session):
    assert started_session.scheduler.pending == ["cupid_pairing"]
    started_session.teardown()
    advance(started_session, 10)
    assert started_session.game_state.get_player(USER_SEER).lover_id is None
    assert started_session.game_state.round.current_turn == Role.CUPID


def test_no_progress_after_game_over(started_session):
    started_session.mark_player_dead(EMMA_WEREWOLF)
    assert advance(started_session, 3 * TURN) == []
    assert started_session.game_state.round.current_turn == Role.CUPID
    assert started_session.game_state.get_player(USER_SEER).lover_id is None


def test_state_snapshot(started_session):
    state = started_session.state()
    assert state["started"]
    assert state["round"] == {
        "phase": "night",
        "day_number": 1,
        "current_turn": "cupid",
        "time_remaining": TURN,
        "seer_power_used_this_night": False,
    }
    assert state["time_display"] == "0:15"
    assert len(state["players"]) == 8
    assert state["players"][2]["is_player"]
    assert state["counts"]["alive_total"] == 8
    assert state["notification"]["title"] == "Cupid's Turn"
    assert state["pending_notifications"] == 1
    assert state["winner"] is None
    assert "cupid" in state["alive_roles"]


def test_read_only_queries(day_session):
    day_session.cast_vote(ALEX_GUARD, LUNA_WITCH)
    assert day_session.round_snapshot()["current_turn"] == "day"
    assert day_session.vote_snapshot() == {LUNA_WITCH: [ALEX_GUARD]}
    assert day_session.counts()["alive_werewolves"] == 1
    assert Role.SEER in day_session.alive_roles()
    assert len(day_session.roster_snapshot()) == 8


def test_end_to_end_first_day(started_session):
    """Night 1 runs out untouched, day 1 lynches Sophie, night 2 begins."""
    produced = advance(started_session, 5 * TURN)
    turn_titles = [n.title for n in produced if n.type == NotificationType.TURN_CHANGE]
    assert turn_titles == [
        "Guard's Turn", "Your Turn as the seer!", "Werewolf's Turn", "Witch's Turn", "Day 1 Begins",
    ]
    round_state = started_session.game_state.round
    assert round_state.phase == GamePhase.DAY
    assert round_state.day_number == 1

    for voter in (EMMA_WEREWOLF, LUNA_WITCH, USER_SEER, ALEX_GUARD):
        started_session.cast_vote(voter, SOPHIE_VILLAGER)
    for voter in (GRACE_HUNTER, OLIVIA_CUPID, JAMES_VILLAGER):
        started_session.cast_vote(voter, ALEX_GUARD)
    produced = advance(started_session, DAY)

    vote_result = next(n for n in produced if n.type == NotificationType.VOTE_RESULT)
    assert vote_result.player_name == "Sophie"
    assert vote_result.role == Role.VILLAGER
    assert round_state.phase == GamePhase.NIGHT
    assert round_state.day_number == 2
    assert started_session.vote_snapshot() == {}

    queue = [n["type"] for n in started_session.game_state.notifications.snapshot()]
    assert queue.index("voteResult") < len(queue) - 1
    assert queue[-1] == "turnChange"


def test_queue_preserves_emission_order(started_session):
    emitted = []
    emitted.extend(advance(started_session, 2 * TURN))
    emitted.extend(started_session.reveal_role(EMMA_WEREWOLF))
    emitted.extend(advance_to_day(started_session))
    delivered = drain(started_session)
    # The initial cupid turn was queued by ready()
    assert delivered[1:] == emitted


def test_concurrent_ticks_are_serialized(started_session):
    threads = [threading.Thread(target=advance, args=(started_session, TURN)) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert started_session.game_state.round.phase == GamePhase.DAY
    assert started_session.night_handler.turns_taken == [
        Role.CUPID, Role.GUARD, Role.SEER, Role.WEREWOLF, Role.WITCH,
    ]
