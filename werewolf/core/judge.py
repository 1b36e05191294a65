"""
Judge/Moderator: announcements and vote ledger rules.
"""

from typing import List, Optional, Dict, TYPE_CHECKING

from .game_engine import GameState
from .player import Player
from .exceptions import GameIntegrityError
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


class Judge:
    """Judge/Moderator that enforces voting rules and narrates the game."""

    def __init__(self, game_state: GameState, config: GameConfig = default_config,
                 event_emitter: Optional['EventEmitter'] = None):
        self.game_state = game_state
        self.config = config
        self.event_emitter = event_emitter
        self.announcements: List[str] = []

    def announce(self, message: str) -> None:
        """Narrate to stdout (and the event stream) when announcements are on."""
        if self.config.use_judge_announcements:
            self.announcements.append(message)
            print(f"[JUDGE] {message}")
            if self.event_emitter:
                self.event_emitter.emit_announcement(
                    message,
                    self.game_state.phase.value,
                    self.game_state.day_number,
                )

    def can_vote(self, voter_id: int) -> bool:
        """Check whether a player may still vote today."""
        if not self.game_state.round.is_voting or self.game_state.is_over:
            return False
        voter = self.game_state.get_player(voter_id)
        return voter is not None and voter.is_alive and not voter.has_voted

    def process_vote(self, voter_id: int, target_id: int) -> bool:
        """
        Record a day vote.
        Returns True if the vote was accepted. One vote per player per day, no changes.
        """
        if not self.can_vote(voter_id):
            return False

        target = self.game_state.get_player(target_id)
        if not target or not target.is_alive:
            return False

        voter = self.game_state.get_player(voter_id)
        self.game_state.votes.setdefault(target_id, set()).add(voter_id)
        voter.has_voted = True
        return True

    def total_votes(self) -> int:
        return sum(len(voters) for voters in self.game_state.votes.values())

    def get_vote_counts(self) -> Dict[int, int]:
        """Vote counts for every player in roster order, zero included."""
        return {
            p.player_id: len(self.game_state.votes.get(p.player_id, ()))
            for p in self.game_state.players
        }

    def get_lynch_target(self) -> Optional[Player]:
        """
        Determine who is lynched.
        Ties go to the first tied player in roster order; no votes means no lynch.
        """
        counts = self.get_vote_counts()
        if not counts:
            return None

        max_votes = max(counts.values())
        if max_votes == 0:
            return None

        candidates = [
            p for p in self.game_state.players
            if p.is_alive and counts[p.player_id] == max_votes
        ]
        return candidates[0] if candidates else None

    def check_ledger_integrity(self) -> None:
        """Every voter must be alive and appear under one target only."""
        seen = set()
        for target_id, voters in self.game_state.votes.items():
            for voter_id in voters:
                voter = self.game_state.get_player(voter_id)
                if voter is None or not voter.is_alive:
                    raise GameIntegrityError(
                        f"Vote ledger holds a vote from dead or unknown player {voter_id}",
                        player_id=voter_id,
                    )
                if voter_id in seen:
                    raise GameIntegrityError(
                        f"Player {voter_id} appears more than once in the vote ledger",
                        player_id=voter_id,
                    )
                seen.add(voter_id)

    def clear_votes(self) -> None:
        self.game_state.votes.clear()
        self.game_state.roster.reset_votes()
