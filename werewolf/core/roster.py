"""
Roster: the fixed, ordered set of players for one game.
"""

from typing import List, Optional, Dict, Any, Iterator, Sequence

from .roles import Role, ROLE_DISPLAY_NAMES, get_role_distribution
from .player import Player
from .exceptions import GameIntegrityError


class Roster:
    """Ordered player list. Created once at game start and never resized."""

    def __init__(self, players: Sequence[Player]):
        self._players: List[Player] = list(players)
        ids = [p.player_id for p in self._players]
        if len(set(ids)) != len(ids):
            raise GameIntegrityError(f"Duplicate player ids in roster: {ids}")
        self._by_id: Dict[int, Player] = {p.player_id: p for p in self._players}
        self.check_integrity()

    @classmethod
    def create(cls, names: Sequence[str], user_player_id: int,
               roles: Optional[Sequence[Role]] = None) -> "Roster":
        """Build a roster from seat names and the fixed role assignment (ids start at 1)."""
        roles = list(roles) if roles is not None else get_role_distribution()
        if len(names) != len(roles):
            raise ValueError(f"Expected {len(roles)} player names, got {len(names)}")
        players = [
            Player(
                player_id=seat,
                name=name,
                role=role,
                is_controlled_by_user=(seat == user_player_id),
            )
            for seat, (name, role) in enumerate(zip(names, roles), start=1)
        ]
        return cls(players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def __len__(self) -> int:
        return len(self._players)

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    def get(self, player_id: int) -> Optional[Player]:
        """Get player by id."""
        return self._by_id.get(player_id)

    @property
    def user(self) -> Player:
        """The single user-controlled player."""
        return next(p for p in self._players if p.is_controlled_by_user)

    def get_alive_players(self) -> List[Player]:
        return [p for p in self._players if p.is_alive]

    def get_dead_players(self) -> List[Player]:
        return [p for p in self._players if not p.is_alive]

    def get_pending_deaths(self) -> List[Player]:
        """Dead players whose death has not been announced yet."""
        return [p for p in self._players if p.death_pending]

    def find_by_role(self, role: Role) -> List[Player]:
        return [p for p in self._players if p.role == role]

    # Derived counts

    @property
    def alive_werewolves(self) -> int:
        return sum(1 for p in self._players if p.is_alive and p.is_werewolf)

    @property
    def alive_non_werewolves(self) -> int:
        return sum(1 for p in self._players if p.is_alive and not p.is_werewolf)

    @property
    def alive_total(self) -> int:
        return sum(1 for p in self._players if p.is_alive)

    @property
    def total_werewolves(self) -> int:
        return sum(1 for p in self._players if p.is_werewolf)

    @property
    def total_non_werewolves(self) -> int:
        return sum(1 for p in self._players if not p.is_werewolf)

    def alive_roles(self) -> List[Role]:
        """Roles with at least one living holder, in display order."""
        living = {p.role for p in self._players if p.is_alive}
        return [role for role in ROLE_DISPLAY_NAMES if role in living]

    def counts(self) -> Dict[str, int]:
        return {
            "alive_werewolves": self.alive_werewolves,
            "alive_non_werewolves": self.alive_non_werewolves,
            "alive_total": self.alive_total,
            "total_werewolves": self.total_werewolves,
            "total_non_werewolves": self.total_non_werewolves,
        }

    # Mutations

    def rename_user(self, name: str, default_name: str = "PlayerX") -> Player:
        user = self.user
        user.name = name.strip() or default_name
        return user

    def pair_lovers(self, first_id: int, second_id: int) -> bool:
        """
        Bind two players as lovers.
        Returns False (and changes nothing) if either is missing, they are the
        same player, or either one is already paired.
        """
        first = self.get(first_id)
        second = self.get(second_id)
        if first is None or second is None or first is second:
            return False
        if first.lover_id is not None or second.lover_id is not None:
            return False
        first.lover_id = second.player_id
        second.lover_id = first.player_id
        return True

    def get_lover(self, player: Player) -> Optional[Player]:
        """Resolve a player's lover, failing loudly on a dangling or one-sided reference."""
        if player.lover_id is None:
            return None
        lover = self.get(player.lover_id)
        if lover is None:
            raise GameIntegrityError(
                f"Player {player.player_id} is paired with missing player {player.lover_id}",
                player_id=player.player_id,
            )
        if lover.lover_id != player.player_id:
            raise GameIntegrityError(
                f"Lover pairing {player.player_id} -> {lover.player_id} is not symmetric",
                player_id=player.player_id,
            )
        return lover

    def reset_protection(self) -> None:
        for player in self._players:
            player.is_protected = False

    def reset_votes(self) -> None:
        for player in self._players:
            player.has_voted = False

    def check_integrity(self) -> None:
        """Raise GameIntegrityError if a roster invariant is broken."""
        users = [p for p in self._players if p.is_controlled_by_user]
        if len(users) != 1:
            raise GameIntegrityError(
                f"Expected exactly one user-controlled player, found {len(users)}"
            )
        for player in self._players:
            self.get_lover(player)

    def snapshot(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self._players]
