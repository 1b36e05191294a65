"""
Game notifications and the one-at-a-time delivery queue.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, List, Deque

from .roles import Role


class NotificationType(Enum):
    """Kinds of user-visible game events."""
    DEATH = "death"
    GAME_OVER = "gameOver"
    TURN_CHANGE = "turnChange"
    SEER_REVEAL = "seerReveal"
    VOTE_RESULT = "voteResult"
    LOVERS_FORMED = "loversFormed"


@dataclass(frozen=True)
class Notification:
    """A single popup-sized event for the presentation layer."""
    type: NotificationType
    title: str
    message: str
    role: Optional[Role] = None
    player_name: Optional[str] = None
    is_village_win: Optional[bool] = None

    @property
    def is_terminal(self) -> bool:
        return self.type == NotificationType.GAME_OVER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "role": self.role.value if self.role else None,
            "player_name": self.player_name,
            "is_village_win": self.is_village_win,
        }


class NotificationQueue:
    """Strict FIFO. Only the head is ever presented; pop() releases the next one."""

    def __init__(self):
        self._items: Deque[Notification] = deque()

    def enqueue(self, notification: Notification) -> Notification:
        self._items.append(notification)
        return notification

    def peek(self) -> Optional[Notification]:
        return self._items[0] if self._items else None

    def pop(self) -> Optional[Notification]:
        return self._items.popleft() if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def snapshot(self) -> List[Dict[str, Any]]:
        return [n.to_dict() for n in self._items]
