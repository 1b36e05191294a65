"""
Delayed one-shot effects measured in clock ticks.
"""

from dataclasses import dataclass
from typing import Callable, List, Any


@dataclass
class ScheduledTask:
    """A callback due after a number of ticks."""
    name: str
    remaining: int
    callback: Callable[[], Any]


class Scheduler:
    """
    Owns every pending delayed effect of a session.
    Tasks fire from tick(); cancel_all() discards them when the session is torn down.
    """

    def __init__(self):
        self._tasks: List[ScheduledTask] = []
        self.closed = False

    def schedule(self, name: str, delay: int, callback: Callable[[], Any]) -> ScheduledTask:
        task = ScheduledTask(name=name, remaining=max(0, delay), callback=callback)
        if not self.closed:
            self._tasks.append(task)
        return task

    def tick(self) -> List[Any]:
        """Advance every task by one tick and run the ones that came due, in scheduling order."""
        if self.closed:
            return []
        for task in self._tasks:
            task.remaining -= 1
        due = [t for t in self._tasks if t.remaining <= 0]
        self._tasks = [t for t in self._tasks if t.remaining > 0]
        return [task.callback() for task in due]

    def cancel_all(self) -> None:
        self._tasks = []
        self.closed = True

    @property
    def pending(self) -> List[str]:
        return [t.name for t in self._tasks]

    def __len__(self) -> int:
        return len(self._tasks)
