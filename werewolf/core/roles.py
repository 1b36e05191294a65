"""
Role definitions for the Werewolf game.
"""

from enum import Enum
from typing import List


class Team(Enum):
    """Team affiliation."""
    VILLAGE = "village"
    WEREWOLVES = "werewolves"


class Role(Enum):
    """The seven fixed role variants."""
    VILLAGER = "villager"
    WEREWOLF = "werewolf"
    SEER = "seer"
    WITCH = "witch"
    HUNTER = "hunter"
    GUARD = "guard"
    CUPID = "cupid"

    @property
    def team(self) -> Team:
        return Team.WEREWOLVES if self is Role.WEREWOLF else Team.VILLAGE

    @property
    def is_werewolf(self) -> bool:
        return self is Role.WEREWOLF

    @property
    def title(self) -> str:
        return ROLE_DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.value


# Display order used by the presentation layer
ROLE_DISPLAY_NAMES = {
    Role.CUPID: "Cupid",
    Role.GUARD: "Guard",
    Role.SEER: "Seer",
    Role.HUNTER: "Hunter",
    Role.WEREWOLF: "Werewolf",
    Role.WITCH: "Witch",
    Role.VILLAGER: "Villager",
}

FIRST_NIGHT_ORDER = [Role.CUPID, Role.GUARD, Role.SEER, Role.WEREWOLF, Role.WITCH]
NIGHT_ORDER = [Role.GUARD, Role.SEER, Role.WEREWOLF, Role.WITCH]


def get_role_distribution() -> List[Role]:
    """
    Get the fixed role assignment for the 8-seat game, in seat order.
    Returns: 1 werewolf, 1 witch, 1 seer, 1 guard, 1 hunter, 1 cupid, 2 villagers
    """
    return [
        Role.WEREWOLF,
        Role.WITCH,
        Role.SEER,  # user-controlled seat
        Role.GUARD,
        Role.HUNTER,
        Role.CUPID,
        Role.VILLAGER,
        Role.VILLAGER,
    ]


def get_night_turn_order(day_number: int) -> List[Role]:
    """Night 1 includes cupid; every later night does not."""
    if day_number <= 1:
        return list(FIRST_NIGHT_ORDER)
    return list(NIGHT_ORDER)
