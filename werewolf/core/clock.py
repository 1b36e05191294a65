"""
Countdown clock driving phase and turn durations.
"""


class Clock:
    """
    Pure countdown. Decrements once per tick, floored at zero.
    Deciding what happens at zero is left to the phase handlers.
    """

    def __init__(self, duration: int = 0):
        self.time_remaining = max(0, duration)

    def reset(self, duration: int) -> None:
        self.time_remaining = max(0, duration)

    def tick(self) -> int:
        if self.time_remaining > 0:
            self.time_remaining -= 1
        return self.time_remaining

    @property
    def expired(self) -> bool:
        return self.time_remaining == 0

    @staticmethod
    def format(seconds: int) -> str:
        """Format seconds as M:SS."""
        return f"{seconds // 60}:{seconds % 60:02d}"

    def __str__(self) -> str:
        return self.format(self.time_remaining)
