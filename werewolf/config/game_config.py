"""
Game configuration and constants.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Tuple


DEFAULT_PLAYER_NAMES = ["Emma", "Luna", "PlayerX", "Alex", "Grace", "Olivia", "James", "Sophie"]


@dataclass
class GameConfig:
    """Configuration for game parameters."""

    # Time limits (seconds, one clock tick each)
    day_voting_duration: int = 30
    turn_duration: int = 15
    game_start_countdown: int = 30
    cupid_pairing_delay: int = 5  # ticks after cupid's turn starts

    # Table setup
    player_names: List[str] = field(default_factory=lambda: list(DEFAULT_PLAYER_NAMES))
    user_player_id: int = 3  # the seer seat
    default_user_name: str = "PlayerX"
    cupid_pair: Tuple[int, int] = (3, 7)  # seer and James

    # Judge announcements
    use_judge_announcements: bool = True

    # Run recording
    record_runs: bool = True
    runs_dir: str = "runs"

    # Agent settings
    agent_type: str = "dummy_agent"
    random_seed: Optional[int] = None  # Random seed for reproducible bot choices

    def __post_init__(self):
        for name in ("day_voting_duration", "turn_duration", "game_start_countdown"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer number of seconds, got {value!r}")
        delay = self.cupid_pairing_delay
        if isinstance(delay, bool) or not isinstance(delay, int) or delay < 0:
            raise ValueError(f"cupid_pairing_delay must be a non-negative integer number of ticks, got {delay!r}")
        self.cupid_pair = tuple(self.cupid_pair)
        if len(self.cupid_pair) != 2:
            raise ValueError(f"cupid_pair must name exactly two players, got {self.cupid_pair!r}")


# Default configuration instance
default_config = GameConfig()
