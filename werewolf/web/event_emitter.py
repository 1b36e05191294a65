"""
Game event fan-out: every event goes to the run recorder (if any) and then to
each registered listener, e.g. the socket broadcaster of the live server.
"""

from typing import Dict, Any, Optional, List, Callable
from threading import Lock

from .run_recorder import RunRecorder


Listener = Callable[[str, Dict[str, Any]], None]


class EventEmitter:
    """Records game events to a run and fans them out to live listeners."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder
        self._listeners: List[Listener] = []
        self._lock = Lock()

    def register_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def _emit(self, event_type: str, **data: Any) -> None:
        # Neither a failed write nor a broken listener may stop the game
        if self.run_recorder:
            try:
                self.run_recorder.record_event(event_type, data)
            except (OSError, TypeError, ValueError) as e:
                print(f"Error recording {event_type} event: {e}")
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event_type, data)
            except Exception as e:
                print(f"Error in {event_type} listener: {e}")

    def emit_game_start(self, players: List[Dict[str, Any]], user_player_id: int) -> None:
        self._emit("game_start", players=players, user_player_id=user_player_id)

    def emit_phase_change(self, phase: str, day_number: int) -> None:
        self._emit("phase_change", phase=phase, day_number=day_number)

    def emit_notification(self, notification: Dict[str, Any], phase: str, day_number: int) -> None:
        """A popup was enqueued for the user."""
        self._emit("notification", notification=notification, phase=phase, day_number=day_number)

    def emit_vote(self, voter: int, target: int, day_number: int) -> None:
        self._emit("vote", voter=voter, target=target, day_number=day_number)

    def emit_vote_results(self, vote_counts: Dict[int, int], voters: Dict[int, List[int]], day_number: int) -> None:
        """Tally at lynch resolution; ``voters`` maps target id to voter ids."""
        self._emit("vote_results", vote_counts=vote_counts, voters=voters, day_number=day_number)

    def emit_seer_reveal(self, target: int, role: str, day_number: int) -> None:
        self._emit("seer_reveal", target=target, role=role, day_number=day_number)

    def emit_announcement(self, message: str, phase: str, day_number: int) -> None:
        self._emit("announcement", message=message, phase=phase, day_number=day_number)

    def emit_game_state_update(self, game_state: Dict[str, Any]) -> None:
        self._emit("game_state_update", game_state=game_state)

    def emit_game_over(self, winner: Optional[str], day_number: int) -> None:
        self._emit("game_over", winner=winner, day_number=day_number)
