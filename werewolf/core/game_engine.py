"""
Core game engine: round state, death propagation and win evaluation.
"""

from enum import Enum
from typing import List, Optional, Dict, Any, Set, Union, TYPE_CHECKING
from dataclasses import dataclass, field

from .roles import Role, Team
from .player import Player
from .roster import Roster
from .clock import Clock
from .notifications import Notification, NotificationQueue, NotificationType
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


DAY_TURN = "day"


class GamePhase(Enum):
    """Current game phase."""
    NIGHT = "night"
    DAY = "day"


@dataclass
class RoundState:
    """Phase/turn bookkeeping. Only the per-phase fields are ever reset."""
    phase: GamePhase = GamePhase.NIGHT
    day_number: int = 1
    current_turn: Union[Role, str, None] = None
    clock: Clock = field(default_factory=Clock)
    seer_power_used_this_night: bool = False

    @property
    def time_remaining(self) -> int:
        return self.clock.time_remaining

    @property
    def is_voting(self) -> bool:
        return self.phase == GamePhase.DAY and self.current_turn == DAY_TURN

    def to_dict(self) -> Dict[str, Any]:
        turn = self.current_turn
        return {
            "phase": self.phase.value,
            "day_number": self.day_number,
            "current_turn": turn.value if isinstance(turn, Role) else turn,
            "time_remaining": self.time_remaining,
            "seer_power_used_this_night": self.seer_power_used_this_night,
        }


class GameState:
    """Complete game state: roster, round, vote ledger and notification queue."""

    def __init__(self, config: GameConfig = default_config,
                 event_emitter: Optional['EventEmitter'] = None,
                 roster: Optional[Roster] = None):
        self.config = config
        self.event_emitter = event_emitter
        self.roster = roster or Roster.create(config.player_names, config.user_player_id)
        self.round = RoundState(clock=Clock(config.turn_duration))
        self.votes: Dict[int, Set[int]] = {}
        self.notifications = NotificationQueue()
        self.action_log: List[Dict[str, Any]] = []
        self.started = False
        self.winner: Optional[Team] = None
        self.is_player_dead = False

    @property
    def players(self) -> List[Player]:
        return self.roster.players

    @property
    def phase(self) -> GamePhase:
        return self.round.phase

    @property
    def day_number(self) -> int:
        return self.round.day_number

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def get_player(self, player_id: int) -> Optional[Player]:
        return self.roster.get(player_id)

    def get_alive_players(self) -> List[Player]:
        return self.roster.get_alive_players()

    def start(self) -> None:
        self.started = True
        self._log_action("game_start", {
            "players": [p.player_id for p in self.players],
            "roles": {p.player_id: p.role.value for p in self.players},
        })

    def notify(self, notification: Notification) -> Notification:
        """Append a notification to the queue and forward it to the emitter."""
        self.notifications.enqueue(notification)
        if self.event_emitter:
            self.event_emitter.emit_notification(
                notification.to_dict(),
                self.round.phase.value,
                self.round.day_number,
            )
        return notification

    # Death propagation

    def death_notification(self, player: Player) -> Notification:
        if player.is_controlled_by_user:
            title = "You Have Died!"
            message = f"You were a {player.role.value}. Your journey ends here!"
        elif player.is_werewolf:
            title = "A Werewolf Has Died!"
            message = f"{player.name} has been eliminated from the game."
        else:
            title = "A Villager Has Died!"
            message = f"{player.name} has been eliminated from the game."
        return Notification(
            type=NotificationType.DEATH,
            title=title,
            message=message,
            role=player.role,
            player_name=player.name,
        )

    def eliminate_player(self, player_id: int, cause: str = "killed",
                         announce: bool = True, defer: bool = False) -> List[Notification]:
        """
        Kill a player and propagate the consequences as one roster update.

        Args:
            player_id: Player to kill
            cause: Recorded in the action log ("killed", "lynch", "night")
            announce: Emit the standard death notification for the victim
            defer: Leave the victim's death unannounced until dusk (night kills),
                unless the death decides the game

        Returns:
            Notifications produced, in order. Empty when the player is missing
            or already dead.
        """
        if self.is_over:
            return []
        player = self.roster.get(player_id)
        if player is None or not player.is_alive:
            return []

        produced: List[Notification] = []
        player.kill(announced=not defer)
        self._strike_vote(player.player_id)
        if not defer:
            if announce:
                produced.append(self.notify(self.death_notification(player)))
            if player.is_controlled_by_user:
                self.is_player_dead = True
        self._log_action("player_died", {"player": player.player_id, "cause": cause})

        # One level only: the lover's own death never cascades further
        lover = self.roster.get_lover(player)
        if lover is not None and lover.is_alive:
            lover.kill(announced=True)
            self._strike_vote(lover.player_id)
            if lover.is_controlled_by_user:
                self.is_player_dead = True
            produced.append(self.notify(Notification(
                type=NotificationType.DEATH,
                title="Lover's Tragedy",
                message=f"{lover.name} died of a broken heart after {player.name}'s death.",
                role=lover.role,
                player_name=lover.name,
            )))
            self._log_action("player_died", {"player": lover.player_id, "cause": "broken heart"})

        self._emit_game_state_update()

        if not defer:
            produced.extend(self.evaluate_win_condition())
        elif self.check_win_condition():
            # Decided at night: the victim is announced now, ahead of gameOver
            produced.extend(self.announce_pending_deaths(night=True))
            produced.extend(self.evaluate_win_condition())
        return produced

    def announce_pending_deaths(self, night: bool = False) -> List[Notification]:
        """Announce every death not yet announced, exactly once each."""
        produced = []
        for player in self.roster.get_pending_deaths():
            if night:
                notification = Notification(
                    type=NotificationType.DEATH,
                    title="Night Death",
                    message=f"{player.name} was killed during the night and was a {player.role.value}.",
                    role=player.role,
                    player_name=player.name,
                )
            else:
                notification = self.death_notification(player)
            produced.append(self.notify(notification))
            player.has_death_popup_shown = True
            if player.is_controlled_by_user:
                self.is_player_dead = True
        return produced

    def _strike_vote(self, voter_id: int) -> None:
        for voters in self.votes.values():
            voters.discard(voter_id)

    # Win evaluation

    def check_win_condition(self) -> Optional[Team]:
        """
        Check if the game has ended and return the winning team.
        Returns None if the game continues.
        """
        alive_werewolves = self.roster.alive_werewolves
        alive_others = self.roster.alive_non_werewolves

        if alive_werewolves == 0:
            return Team.VILLAGE

        if alive_others == 0 or alive_werewolves >= alive_others:
            return Team.WEREWOLVES

        return None

    def evaluate_win_condition(self) -> List[Notification]:
        """
        Announce any unannounced deaths first, then check victory.
        Emits at most one gameOver for the whole game.
        """
        if not self.started or self.is_over:
            return []

        produced = self.announce_pending_deaths()

        winner = self.check_win_condition()
        if winner:
            produced.append(self.end_game(winner))
        return produced

    def end_game(self, winner: Team) -> Notification:
        """End the game with a winner."""
        self.winner = winner
        village_won = winner == Team.VILLAGE
        self._log_action("game_over", {
            "winner": winner.value,
            "day_number": self.round.day_number,
        })
        if self.event_emitter:
            self.event_emitter.emit_game_over(winner.value, self.round.day_number)
        return self.notify(Notification(
            type=NotificationType.GAME_OVER,
            title="Victory!" if village_won else "Defeat!",
            message="The village has prevailed!" if village_won else "The werewolves reign supreme...",
            is_village_win=village_won,
        ))

    # Snapshots

    def vote_snapshot(self) -> Dict[int, List[int]]:
        return {target: sorted(voters) for target, voters in self.votes.items() if voters}

    def get_game_summary(self) -> Dict[str, Any]:
        """Get a summary of the current game state."""
        summary = self.round.to_dict()
        summary.update(self.roster.counts())
        summary["started"] = self.started
        summary["winner"] = self.winner.value if self.winner else None
        summary["is_player_dead"] = self.is_player_dead
        return summary

    def _log_action(self, action_type: str, data: Dict[str, Any]) -> None:
        """Log a game action."""
        self.action_log.append({
            "type": action_type,
            "phase": self.round.phase.value,
            "day": self.round.day_number,
            "data": data
        })

    def _emit_game_state_update(self) -> None:
        """Emit game state update event."""
        if self.event_emitter:
            self.event_emitter.emit_game_state_update({
                **self.get_game_summary(),
                "players": self.roster.snapshot(),
            })
