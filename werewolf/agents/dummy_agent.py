"""
Dummy Agent implementation with seeded random behavior.
"""

import random
from typing import Optional, Set

from .base_agent import BaseAgent, AgentContext
from ..core import Player, Role
from ..config.game_config import GameConfig, default_config


class DummyAgent(BaseAgent):
    """
    Simple dummy agent:
    - All players: vote for a random living player other than themselves
    - Werewolf: kill a random living non-werewolf
    - Guard: protect a random living player
    - Seer: reveal a random living player not revealed before
    """

    def __init__(self, player: Player, config: GameConfig = default_config):
        super().__init__(player, config)
        # Combine seed with seat so each bot is different but reproducible
        seed = config.random_seed
        if seed is not None:
            self.random = random.Random(seed + player.player_id)
        else:
            self.random = random.Random()
        self.revealed: Set[int] = set()

    def get_vote_choice(self, context: AgentContext) -> Optional[int]:
        if "vote" not in context.available_actions:
            return None
        targets = [p.player_id for p in context.alive_others]
        return self.random.choice(targets) if targets else None

    def get_night_target(self, context: AgentContext) -> Optional[int]:
        if self.player.role.value not in context.available_actions:
            return None

        role = self.player.role
        if role == Role.WEREWOLF:
            targets = [p.player_id for p in context.alive_others if not p.is_werewolf]
        elif role == Role.GUARD:
            targets = [p.player_id for p in context.game_state.get_alive_players()]
        elif role == Role.SEER:
            targets = [p.player_id for p in context.alive_others if p.player_id not in self.revealed]
        else:
            return None

        if not targets:
            return None
        target = self.random.choice(targets)
        if role == Role.SEER:
            self.revealed.add(target)
        return target
