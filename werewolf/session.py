"""
Game session: the in-process API consumed by the presentation layer.
"""

import threading
from typing import Callable, Dict, Any, List, Optional

from .core import (
    GameState, Judge, Clock, Scheduler, Notification, Role,
)
from .phases import NightPhaseHandler, VotingHandler
from .config.game_config import GameConfig, default_config
from .web.event_emitter import EventEmitter


class GameSession:
    """
    Owns one game from lobby to game over.

    Every public call runs to completion under the session lock, so a timer
    thread calling tick() never interleaves with a vote or a reveal.
    Mutating calls return the notifications they produced (empty when ignored).
    """

    def __init__(self, config: GameConfig = default_config,
                 event_emitter: Optional[EventEmitter] = None,
                 on_leave_game: Optional[Callable[[], None]] = None):
        self.config = config
        self.event_emitter = event_emitter
        self.on_leave_game = on_leave_game
        self._lock = threading.RLock()

        self.game_state = GameState(config, event_emitter=event_emitter)
        self.judge = Judge(self.game_state, config, event_emitter=event_emitter)
        self.scheduler = Scheduler()
        self.night_handler = NightPhaseHandler(
            self.game_state, self.judge, self.scheduler, config, event_emitter=event_emitter
        )
        self.voting_handler = VotingHandler(
            self.game_state, self.judge, self.night_handler, event_emitter=event_emitter
        )
        self.lobby_clock = Clock(config.game_start_countdown)
        self.closed = False

    # Lifecycle

    @property
    def started(self) -> bool:
        return self.game_state.started

    @property
    def active(self) -> bool:
        return not self.closed and not self.game_state.is_over

    def ready(self) -> List[Notification]:
        """Skip the lobby countdown and start right away."""
        with self._lock:
            if self.closed or self.started:
                return []
            return self._start_game()

    def _start_game(self) -> List[Notification]:
        self.game_state.start()
        self.judge.announce("The game begins.")
        if self.event_emitter:
            self.event_emitter.emit_game_start(
                self.game_state.roster.snapshot(), self.config.user_player_id
            )
        return self.night_handler.start_night()

    def tick(self) -> List[Notification]:
        """One second of wall time."""
        with self._lock:
            if self.closed or self.game_state.is_over:
                return []

            if not self.started:
                self.lobby_clock.tick()
                if self.lobby_clock.expired:
                    return self._start_game()
                return []

            self.game_state.round.clock.tick()
            produced: List[Notification] = []
            for result in self.scheduler.tick():
                produced.extend(result or [])

            produced.extend(self.night_handler.on_tick())
            produced.extend(self.voting_handler.on_tick())
            return produced

    def teardown(self) -> None:
        """Discard timers and pending delayed effects; the session accepts nothing afterwards."""
        with self._lock:
            self.scheduler.cancel_all()
            self.closed = True

    # Player actions

    def cast_vote(self, voter_id: int, target_id: int) -> List[Notification]:
        with self._lock:
            if self.closed:
                return []
            return self.voting_handler.cast_vote(voter_id, target_id)

    def vote(self, target_id: int) -> List[Notification]:
        """The user's own vote."""
        if self.game_state.is_player_dead:
            return []
        return self.cast_vote(self.config.user_player_id, target_id)

    def reveal_role(self, target_id: int) -> List[Notification]:
        with self._lock:
            if self.closed:
                return []
            return self.night_handler.reveal_role(target_id)

    def mark_player_dead(self, player_id: int) -> List[Notification]:
        """Direct kill, for dev affordances and tests."""
        with self._lock:
            if self.closed:
                return []
            return self.game_state.eliminate_player(player_id, cause="killed")

    def protect_player(self, target_id: int) -> bool:
        with self._lock:
            if self.closed:
                return False
            return self.night_handler.protect_player(target_id)

    def night_kill(self, target_id: int) -> List[Notification]:
        with self._lock:
            if self.closed:
                return []
            return self.night_handler.night_kill(target_id)

    def set_user_display_name(self, name: str) -> str:
        with self._lock:
            user = self.game_state.roster.rename_user(name or "", self.config.default_user_name)
            return user.name

    # Notification queue

    def current_notification(self) -> Optional[Notification]:
        with self._lock:
            return self.game_state.notifications.peek()

    def acknowledge_notification(self) -> Optional[Notification]:
        """Pop the head of the queue. Acknowledging game over ends the session."""
        with self._lock:
            notification = self.game_state.notifications.pop()
            if notification is None or not notification.is_terminal:
                return notification
            self.teardown()
        if self.on_leave_game:
            self.on_leave_game()
        return notification

    # Read-only queries

    def roster_snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            return self.game_state.roster.snapshot()

    def round_snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self.game_state.round.to_dict()

    def vote_snapshot(self) -> Dict[int, List[int]]:
        with self._lock:
            return self.game_state.vote_snapshot()

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return self.game_state.roster.counts()

    def alive_roles(self) -> List[Role]:
        with self._lock:
            return self.game_state.roster.alive_roles()

    @property
    def is_player_dead(self) -> bool:
        return self.game_state.is_player_dead

    def can_vote(self) -> bool:
        """Whether the user's vote affordance should be shown."""
        with self._lock:
            return self.active and self.judge.can_vote(self.config.user_player_id)

    def can_reveal(self) -> bool:
        """Whether the user's seer affordance should be shown."""
        with self._lock:
            round_state = self.game_state.round
            user = self.game_state.roster.user
            return (self.active and user.role == Role.SEER and user.is_alive
                    and round_state.current_turn == Role.SEER
                    and not round_state.seer_power_used_this_night)

    def state(self) -> Dict[str, Any]:
        """Everything the presentation layer renders, in one snapshot."""
        with self._lock:
            head = self.game_state.notifications.peek()
            return {
                "started": self.started,
                "closed": self.closed,
                "lobby_countdown": self.lobby_clock.time_remaining,
                "round": self.game_state.round.to_dict(),
                "time_display": str(self.game_state.round.clock),
                "players": self.game_state.roster.snapshot(),
                "votes": self.game_state.vote_snapshot(),
                "counts": self.game_state.roster.counts(),
                "alive_roles": [r.value for r in self.game_state.roster.alive_roles()],
                "notification": head.to_dict() if head else None,
                "pending_notifications": len(self.game_state.notifications),
                "is_player_dead": self.is_player_dead,
                "winner": self.game_state.winner.value if self.game_state.winner else None,
            }
