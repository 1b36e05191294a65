"""
Exceptions for internal-consistency faults.
"""

from typing import Optional


class GameIntegrityError(Exception):
    """Raised when game state violates an invariant the public API guarantees."""

    def __init__(self, message: str, player_id: Optional[int] = None):
        self.player_id = player_id
        self.message = message
        super().__init__(self.message)
