"""
Tests for day voting and lynch resolution.
"""

import pytest
from werewolf.core import GamePhase, Role, NotificationType, GameIntegrityError
from conftest import (
    advance, drain, DAY,
    EMMA_WEREWOLF, LUNA_WITCH, USER_SEER, ALEX_GUARD, GRACE_HUNTER,
    OLIVIA_CUPID, JAMES_VILLAGER, SOPHIE_VILLAGER,
)


def test_vote_is_recorded(day_session):
    assert day_session.cast_vote(ALEX_GUARD, LUNA_WITCH) == []
    assert day_session.vote_snapshot() == {LUNA_WITCH: [ALEX_GUARD]}
    assert day_session.game_state.get_player(ALEX_GUARD).has_voted


def test_one_vote_per_player_per_day(day_session):
    judge = day_session.judge
    assert judge.process_vote(ALEX_GUARD, LUNA_WITCH)
    assert not judge.process_vote(ALEX_GUARD, GRACE_HUNTER)
    assert day_session.vote_snapshot() == {LUNA_WITCH: [ALEX_GUARD]}


def test_votes_rejected_at_night(started_session):
    assert not started_session.judge.process_vote(ALEX_GUARD, LUNA_WITCH)
    assert started_session.vote_snapshot() == {}


def test_dead_voter_and_dead_target_rejected(day_session):
    judge = day_session.judge
    day_session.mark_player_dead(SOPHIE_VILLAGER)
    assert not judge.process_vote(SOPHIE_VILLAGER, LUNA_WITCH)
    assert not judge.process_vote(ALEX_GUARD, SOPHIE_VILLAGER)
    assert not judge.process_vote(404, LUNA_WITCH)
    assert not judge.process_vote(ALEX_GUARD, 404)
    assert day_session.vote_snapshot() == {}


def test_user_vote_helper(day_session):
    day_session.vote(LUNA_WITCH)
    assert day_session.vote_snapshot() == {LUNA_WITCH: [USER_SEER]}
    assert not day_session.can_vote()


def test_lynch_on_timeout(day_session):
    for voter in (EMMA_WEREWOLF, LUNA_WITCH, USER_SEER, ALEX_GUARD):
        day_session.cast_vote(voter, SOPHIE_VILLAGER)
    for voter in (GRACE_HUNTER, OLIVIA_CUPID, JAMES_VILLAGER):
        day_session.cast_vote(voter, LUNA_WITCH)

    # Seven of eight voted: wait for the clock
    assert day_session.game_state.phase == GamePhase.DAY
    produced = advance(day_session, DAY)

    vote_results = [n for n in produced if n.type == NotificationType.VOTE_RESULT]
    assert len(vote_results) == 1
    assert vote_results[0].player_name == "Sophie"
    assert vote_results[0].role == Role.VILLAGER
    assert vote_results[0].message == "Sophie received the most votes (4) and was a villager."
    assert not day_session.game_state.get_player(SOPHIE_VILLAGER).is_alive

    round_state = day_session.game_state.round
    assert round_state.phase == GamePhase.NIGHT
    assert round_state.day_number == 2
    assert day_session.vote_snapshot() == {}
    assert not any(p.has_voted for p in day_session.game_state.players)


def test_lynch_resolves_when_everyone_voted(day_session):
    voters = [EMMA_WEREWOLF, LUNA_WITCH, USER_SEER, ALEX_GUARD, GRACE_HUNTER, OLIVIA_CUPID, JAMES_VILLAGER]
    for voter in voters:
        day_session.cast_vote(voter, SOPHIE_VILLAGER)
    produced = day_session.cast_vote(SOPHIE_VILLAGER, LUNA_WITCH)

    assert produced[0].type == NotificationType.VOTE_RESULT
    assert produced[0].player_name == "Sophie"
    assert day_session.game_state.phase == GamePhase.NIGHT
    assert day_session.game_state.round.current_turn == Role.GUARD


def test_lynch_has_no_separate_death_notice(day_session):
    for voter in (EMMA_WEREWOLF, LUNA_WITCH, USER_SEER, ALEX_GUARD):
        day_session.cast_vote(voter, SOPHIE_VILLAGER)
    produced = advance(day_session, DAY)
    assert not any(n.type == NotificationType.DEATH for n in produced)
    assert day_session.game_state.get_player(SOPHIE_VILLAGER).has_death_popup_shown


def test_tie_goes_to_first_in_roster_order(day_session):
    day_session.cast_vote(EMMA_WEREWOLF, LUNA_WITCH)
    day_session.cast_vote(USER_SEER, LUNA_WITCH)
    day_session.cast_vote(GRACE_HUNTER, ALEX_GUARD)
    day_session.cast_vote(OLIVIA_CUPID, ALEX_GUARD)

    counts = day_session.judge.get_vote_counts()
    assert counts[LUNA_WITCH] == 2
    assert counts[ALEX_GUARD] == 2
    assert counts[GRACE_HUNTER] == 0

    advance(day_session, DAY)
    assert not day_session.game_state.get_player(LUNA_WITCH).is_alive
    assert day_session.game_state.get_player(ALEX_GUARD).is_alive


def test_no_votes_means_no_lynch(day_session):
    produced = advance(day_session, DAY)
    assert not any(n.type == NotificationType.VOTE_RESULT for n in produced)
    assert day_session.game_state.roster.alive_total == 8
    assert day_session.game_state.day_number == 2


def test_lynching_the_werewolf_ends_the_game(day_session):
    for voter in (LUNA_WITCH, USER_SEER, ALEX_GUARD, GRACE_HUNTER):
        day_session.cast_vote(voter, EMMA_WEREWOLF)
    produced = advance(day_session, DAY)

    assert [n.type for n in produced] == [NotificationType.VOTE_RESULT, NotificationType.GAME_OVER]
    assert produced[1].is_village_win
    # No new night after game over
    assert day_session.game_state.phase == GamePhase.DAY
    assert day_session.game_state.day_number == 1


def test_lynched_lover_takes_partner(day_session):
    # Night 1 paired PlayerX (3) with James (7)
    for voter in (EMMA_WEREWOLF, LUNA_WITCH, ALEX_GUARD):
        day_session.cast_vote(voter, JAMES_VILLAGER)
    produced = advance(day_session, DAY)

    assert produced[0].type == NotificationType.VOTE_RESULT
    assert produced[1].title == "Lover's Tragedy"
    assert produced[1].message == "PlayerX died of a broken heart after James's death."
    assert day_session.is_player_dead


def test_dead_voters_vote_is_struck(day_session):
    day_session.cast_vote(ALEX_GUARD, LUNA_WITCH)
    day_session.mark_player_dead(ALEX_GUARD)
    assert day_session.vote_snapshot() == {}


def test_ledger_with_dead_voter_is_integrity_fault(day_session):
    game_state = day_session.game_state
    game_state.get_player(SOPHIE_VILLAGER).kill()
    game_state.votes[LUNA_WITCH] = {SOPHIE_VILLAGER}
    with pytest.raises(GameIntegrityError):
        day_session.voting_handler.resolve()


def test_voting_after_resolution_ignored(day_session):
    advance(day_session, DAY)
    drain(day_session)
    assert day_session.cast_vote(ALEX_GUARD, LUNA_WITCH) == []
