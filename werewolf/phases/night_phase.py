"""
Night phase handler: turn sequencing, seer reveals and cupid's pairing.
"""

from typing import List, Optional, TYPE_CHECKING

from ..core import (
    GameState, GamePhase, Judge, Role, Scheduler,
    Notification, NotificationType, DAY_TURN, get_night_turn_order,
)
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


class NightPhaseHandler:
    """Walks the night's fixed role order, one timed turn per role, then opens the day."""

    def __init__(self, game_state: GameState, judge: Judge, scheduler: Scheduler,
                 config: GameConfig = default_config,
                 event_emitter: Optional['EventEmitter'] = None):
        self.game_state = game_state
        self.judge = judge
        self.scheduler = scheduler
        self.config = config
        self.event_emitter = event_emitter
        self.cupid_scheduled = False
        # Turns activated this night, in order
        self.turns_taken: List[Role] = []

    @property
    def round(self):
        return self.game_state.round

    def start_night(self) -> List[Notification]:
        """Enter night with no current turn and immediately activate the first role."""
        self.round.phase = GamePhase.NIGHT
        self.round.current_turn = None
        self.round.clock.reset(self.config.turn_duration)
        self.game_state.roster.reset_protection()
        self.turns_taken = []
        self.game_state._log_action("night_start", {"day_number": self.round.day_number})
        self.judge.announce("Night falls.")
        if self.event_emitter:
            self.event_emitter.emit_phase_change("night", self.round.day_number)
        return self.advance_turn()

    def next_turn(self) -> Optional[Role]:
        order = get_night_turn_order(self.round.day_number)
        current = self.round.current_turn
        index = order.index(current) if isinstance(current, Role) and current in order else -1
        return order[index + 1] if index + 1 < len(order) else None

    def advance_turn(self) -> List[Notification]:
        """Move to the next role in tonight's order, or to day when none remain."""
        if self.game_state.is_over or self.round.phase != GamePhase.NIGHT:
            return []

        next_role = self.next_turn()
        if next_role is None:
            return self.begin_day()
        return self._activate(next_role)

    def on_tick(self) -> List[Notification]:
        """Time-driven fallback: a turn with no action simply expires."""
        if self.round.phase != GamePhase.NIGHT:
            return []
        if self.round.current_turn is None or self.round.clock.expired:
            return self.advance_turn()
        return []

    def _activate(self, role: Role) -> List[Notification]:
        self.round.current_turn = role
        self.round.clock.reset(self.config.turn_duration)
        self.turns_taken.append(role)
        if role == Role.SEER:
            self.round.seer_power_used_this_night = False

        self.game_state._log_action("turn_start", {"role": role.value})
        self.judge.announce(f"The {role.value} wakes up, you have {self.config.turn_duration} seconds.")

        produced = [self.game_state.notify(self._turn_notification(role))]

        if role == Role.CUPID and not self.cupid_scheduled:
            self.cupid_scheduled = True
            self.scheduler.schedule("cupid_pairing", self.config.cupid_pairing_delay, self.form_lovers)
        return produced

    def _turn_notification(self, role: Role) -> Notification:
        user = self.game_state.roster.user
        own_turn = user.role == role and user.is_alive
        if own_turn:
            title = f"Your Turn as the {role.value}!"
            if role == Role.SEER:
                message = "Choose a living player to reveal their role (once per night)."
            else:
                message = f"You have {self.config.turn_duration} seconds to act."
        else:
            title = f"{role.title}'s Turn"
            message = f"The {role.value} has {self.config.turn_duration} seconds to act."
        return Notification(type=NotificationType.TURN_CHANGE, title=title, message=message, role=role)

    def begin_day(self) -> List[Notification]:
        """Dusk: open day voting and announce the night's deaths."""
        self.round.phase = GamePhase.DAY
        self.round.current_turn = DAY_TURN
        self.round.clock.reset(self.config.day_voting_duration)
        self.game_state._log_action("day_start", {"day_number": self.round.day_number})
        self.judge.announce(f"Morning has come. Day {self.round.day_number} voting is open.")
        if self.event_emitter:
            self.event_emitter.emit_phase_change("day", self.round.day_number)

        produced = [self.game_state.notify(Notification(
            type=NotificationType.TURN_CHANGE,
            title=f"Day {self.round.day_number} Begins",
            message=f"The village wakes. You have {self.config.day_voting_duration} seconds to vote.",
        ))]
        produced.extend(self.game_state.announce_pending_deaths(night=True))
        produced.extend(self.game_state.evaluate_win_condition())
        self.game_state._emit_game_state_update()
        return produced

    def form_lovers(self) -> List[Notification]:
        """Cupid's arrow: bind the designated pair. Happens at most once per game."""
        if self.game_state.is_over:
            return []
        first_id, second_id = self.config.cupid_pair
        roster = self.game_state.roster
        if not roster.pair_lovers(first_id, second_id):
            return []

        first, second = roster.get(first_id), roster.get(second_id)
        # Name the user's seat first when it is part of the pair
        if second.is_controlled_by_user:
            first, second = second, first
        self.game_state._log_action("lovers_formed", {"players": [first.player_id, second.player_id]})
        self.judge.announce("Cupid's arrow has struck.")
        return [self.game_state.notify(Notification(
            type=NotificationType.LOVERS_FORMED,
            title="Cupid's Arrow",
            message=f"{first.name} is in love with {second.name}!",
            player_name=second.name,
        ))]

    def reveal_role(self, target_id: int) -> List[Notification]:
        """
        Seer's one-shot vision. Ends the seer's turn early on success.
        Silently ignored when the power is spent, it is not the seer's turn,
        or the target is missing or dead.
        """
        if self.game_state.is_over or self.round.phase != GamePhase.NIGHT:
            return []
        if self.round.current_turn != Role.SEER or self.round.seer_power_used_this_night:
            return []
        seers = [p for p in self.game_state.roster.find_by_role(Role.SEER) if p.is_alive]
        if not seers:
            return []
        target = self.game_state.get_player(target_id)
        if target is None or not target.is_alive:
            return []

        self.round.seer_power_used_this_night = True
        self.game_state._log_action("seer_reveal", {"target": target.player_id, "role": target.role.value})
        if self.event_emitter:
            self.event_emitter.emit_seer_reveal(target.player_id, target.role.value, self.round.day_number)
        produced = [self.game_state.notify(Notification(
            type=NotificationType.SEER_REVEAL,
            title="Seer's Vision",
            message=f"{target.name} is a {target.role.value}!",
            role=target.role,
            player_name=target.name,
        ))]
        self.judge.announce("The seer goes to sleep.")
        produced.extend(self.advance_turn())
        return produced

    def protect_player(self, target_id: int) -> bool:
        """Guard hook: shield a living player from tonight's kill."""
        if self.game_state.is_over or self.round.phase != GamePhase.NIGHT:
            return False
        target = self.game_state.get_player(target_id)
        if target is None or not target.is_alive:
            return False
        target.is_protected = True
        self.game_state._log_action("protect", {"target": target_id})
        return True

    def night_kill(self, target_id: int) -> List[Notification]:
        """
        Werewolf/witch hook: kill a living, unprotected player.
        The victim stays unannounced until dusk unless the kill decides the game;
        a lover dies of a broken heart at once.
        """
        if self.game_state.is_over or self.round.phase != GamePhase.NIGHT:
            return []
        target = self.game_state.get_player(target_id)
        if target is None or not target.is_alive or target.is_protected:
            return []
        return self.game_state.eliminate_player(target_id, cause="night", defer=True)
