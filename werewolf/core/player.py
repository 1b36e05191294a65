"""
Player class representing a seat at the table.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum

from .roles import Role


class PlayerStatus(Enum):
    """Player status in the game."""
    ALIVE = "alive"
    DEAD = "dead"


@dataclass
class Player:
    """Represents a player in the game."""
    player_id: int
    name: str
    role: Role
    status: PlayerStatus = PlayerStatus.ALIVE
    is_protected: bool = False
    lover_id: Optional[int] = None
    has_death_popup_shown: bool = False
    is_controlled_by_user: bool = False
    has_voted: bool = False

    def __str__(self) -> str:
        return f"{self.name} ({self.role.value})"

    @property
    def is_alive(self) -> bool:
        """Check if player is alive."""
        return self.status == PlayerStatus.ALIVE

    @property
    def is_werewolf(self) -> bool:
        return self.role.is_werewolf

    @property
    def death_pending(self) -> bool:
        """Dead but not yet announced to the table."""
        return not self.is_alive and not self.has_death_popup_shown

    def kill(self, announced: bool = True) -> None:
        """Mark player as dead."""
        self.status = PlayerStatus.DEAD
        self.is_protected = False
        if announced:
            self.has_death_popup_shown = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.player_id,
            "name": self.name,
            "role": self.role.value,
            "status": self.status.value,
            "is_protected": self.is_protected,
            "lover_id": self.lover_id,
            "has_death_popup_shown": self.has_death_popup_shown,
            "is_player": self.is_controlled_by_user,
            "has_voted": self.has_voted,
        }
