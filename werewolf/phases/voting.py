"""
Day voting: vote collection and lynch resolution.
"""

from typing import List, Optional, TYPE_CHECKING

from ..core import GameState, Judge, Notification, NotificationType
from .night_phase import NightPhaseHandler

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


class VotingHandler:
    """Handles day votes and resolves the lynch on timeout or full participation."""

    def __init__(self, game_state: GameState, judge: Judge, night_handler: NightPhaseHandler,
                 event_emitter: Optional['EventEmitter'] = None):
        self.game_state = game_state
        self.judge = judge
        self.night_handler = night_handler
        self.event_emitter = event_emitter

    def cast_vote(self, voter_id: int, target_id: int) -> List[Notification]:
        """
        Record a vote, then check whether the day is decided.
        Invalid votes are ignored and produce nothing.
        """
        if not self.judge.process_vote(voter_id, target_id):
            return []

        day = self.game_state.day_number
        self.game_state._log_action("vote", {"voter": voter_id, "target": target_id})
        if self.event_emitter:
            self.event_emitter.emit_vote(voter_id, target_id, day)
        return self.check_resolution()

    def on_tick(self) -> List[Notification]:
        return self.check_resolution()

    def is_decided(self) -> bool:
        round_state = self.game_state.round
        if not round_state.is_voting or self.game_state.is_over:
            return False
        return (round_state.clock.expired
                or self.judge.total_votes() == self.game_state.roster.alive_total)

    def check_resolution(self) -> List[Notification]:
        if not self.is_decided():
            return []
        return self.resolve()

    def resolve(self) -> List[Notification]:
        """Lynch the top-voted player (if any votes were cast) and move to the next night."""
        self.judge.check_ledger_integrity()
        counts = self.judge.get_vote_counts()
        target = self.judge.get_lynch_target()
        produced: List[Notification] = []
        day = self.game_state.day_number

        if self.event_emitter:
            self.event_emitter.emit_vote_results(counts, self.game_state.vote_snapshot(), day)

        if target is not None:
            max_votes = counts[target.player_id]
            voters = sorted(self.game_state.votes.get(target.player_id, ()))
            self.judge.announce(f"{max_votes} votes for {target.name}, voted: {voters}")
            produced.append(self.game_state.notify(Notification(
                type=NotificationType.VOTE_RESULT,
                title="Vote Result",
                message=f"{target.name} received the most votes ({max_votes}) and was a {target.role.value}.",
                role=target.role,
                player_name=target.name,
            )))
            self.game_state._log_action("lynch", {
                "player": target.player_id,
                "votes": max_votes,
                "voters": voters,
            })
            # The vote result stands in for the victim's own death notice
            produced.extend(self.game_state.eliminate_player(target.player_id, cause="lynch", announce=False))
        else:
            self.judge.announce("No votes were cast. Nobody is lynched today.")

        if self.game_state.is_over:
            return produced

        self.game_state.round.day_number += 1
        self.judge.clear_votes()
        produced.extend(self.night_handler.start_night())
        return produced
