"""
Core game engine components: roster, clock, notifications, game state and rules.
"""

from .roles import Role, Team, get_role_distribution, get_night_turn_order
from .player import Player, PlayerStatus
from .roster import Roster
from .clock import Clock
from .scheduler import Scheduler, ScheduledTask
from .notifications import Notification, NotificationQueue, NotificationType
from .exceptions import GameIntegrityError
from .game_engine import GameState, GamePhase, RoundState, DAY_TURN
from .judge import Judge

__all__ = [
    'Role',
    'Team',
    'get_role_distribution',
    'get_night_turn_order',
    'Player',
    'PlayerStatus',
    'Roster',
    'Clock',
    'Scheduler',
    'ScheduledTask',
    'Notification',
    'NotificationQueue',
    'NotificationType',
    'GameIntegrityError',
    'GameState',
    'GamePhase',
    'RoundState',
    'DAY_TURN',
    'Judge',
]
