"""
Base agent interface for bot-controlled seats.
"""

from typing import List, Optional
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..core import Player, GameState, Role
from ..config.game_config import GameConfig, default_config


@dataclass
class AgentContext:
    """What a bot seat can see when it is asked to act."""
    player: Player
    game_state: GameState
    available_actions: List[str]

    @property
    def alive_others(self) -> List[Player]:
        return [p for p in self.game_state.get_alive_players() if p.player_id != self.player.player_id]


class BaseAgent(ABC):
    """
    Bot controller for one seat.

    Agents only choose targets; the session validates and applies them.
    """

    def __init__(self, player: Player, config: GameConfig = default_config):
        self.player = player
        self.config = config

    def build_context(self, game_state: GameState) -> AgentContext:
        actions = []
        round_state = game_state.round
        if self.player.is_alive:
            if round_state.is_voting and not self.player.has_voted:
                actions.append("vote")
            if round_state.current_turn == self.player.role:
                actions.append(self.player.role.value)
        return AgentContext(player=self.player, game_state=game_state, available_actions=actions)

    @abstractmethod
    def get_vote_choice(self, context: AgentContext) -> Optional[int]:
        """Pick a player to vote for during the day."""
        pass

    @abstractmethod
    def get_night_target(self, context: AgentContext) -> Optional[int]:
        """Pick a target for this seat's night role, or None to let the turn expire."""
        pass

    def acts_at_night(self) -> bool:
        return self.player.role in (Role.SEER, Role.GUARD, Role.WEREWOLF)
