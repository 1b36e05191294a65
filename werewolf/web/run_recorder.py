"""
Persists a game's event stream so finished (or abandoned) games can be replayed.

Layout on disk::

    runs/<run name>/events.jsonl    one event per line, in emission order
    runs/<run name>/metadata.json   roster, seed and timings
"""

import json
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Dict, Any, Optional, List


EVENTS_FILE = "events.jsonl"
METADATA_FILE = "metadata.json"

OUTCOMES = {
    "village": "Village Wins",
    "werewolves": "Werewolves Win",
}


class RunRecorder:
    """Appends game events to the current run directory."""

    def __init__(self, runs_dir: str = "runs"):
        self.runs_dir = Path(runs_dir)
        self.runs_dir.mkdir(parents=True, exist_ok=True)
        self.current_run_dir: Optional[Path] = None
        self._lock = Lock()
        self._sequence = 0

    @property
    def events_file(self) -> Optional[Path]:
        return self.current_run_dir / EVENTS_FILE if self.current_run_dir else None

    @property
    def metadata_file(self) -> Optional[Path]:
        return self.current_run_dir / METADATA_FILE if self.current_run_dir else None

    def create_run(self, run_name: Optional[str] = None) -> str:
        """
        Open a run directory; events recorded afterwards land there.

        Args:
            run_name: Directory name. Defaults to ``game_<timestamp>``.

        Returns:
            The run name actually used
        """
        run_name = run_name or datetime.now().strftime("game_%Y%m%d_%H%M%S")
        run_dir = self.runs_dir / run_name
        run_dir.mkdir(exist_ok=True)
        with self._lock:
            self.current_run_dir = run_dir
            self._sequence = 0
        return run_name

    def record_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Append one event. Ignored until a run has been created."""
        if self.current_run_dir is None:
            return

        with self._lock:
            line = json.dumps({
                "timestamp": datetime.now().isoformat(),
                "event_type": event_type,
                "data": data,
                "sequence": self._sequence,
            })
            self._sequence += 1
            with open(self.events_file, 'a') as f:
                f.write(line + '\n')

    def save_metadata(self, metadata: Dict[str, Any]) -> None:
        if self.current_run_dir is None:
            return
        with self._lock:
            self.metadata_file.write_text(json.dumps(metadata, indent=2))

    def get_run_path(self) -> Optional[Path]:
        return self.current_run_dir

    @staticmethod
    def read_events(events_file: Path) -> List[Dict[str, Any]]:
        with open(events_file, 'r') as f:
            return [json.loads(line) for line in f if line.strip()]

    @staticmethod
    def read_metadata(metadata_file: Path) -> Dict[str, Any]:
        with open(metadata_file, 'r') as f:
            return json.load(f)

    @classmethod
    def describe_run(cls, run_dir: Path) -> Dict[str, Any]:
        """Summary of one run directory: file presence, event count and outcome."""
        metadata_file = run_dir / METADATA_FILE
        events_file = run_dir / EVENTS_FILE
        info: Dict[str, Any] = {
            "name": run_dir.name,
            "path": str(run_dir),
            "has_metadata": metadata_file.exists(),
            "has_events": events_file.exists(),
        }

        if info["has_metadata"]:
            try:
                info["metadata"] = cls.read_metadata(metadata_file)
            except (OSError, json.JSONDecodeError) as e:
                print(f"Skipping unreadable metadata in {run_dir.name}: {e}")

        if info["has_events"]:
            try:
                events = cls.read_events(events_file)
            except (OSError, json.JSONDecodeError) as e:
                print(f"Skipping unreadable events in {run_dir.name}: {e}")
                events = []
            info["event_count"] = len(events)
            winners = [e.get("data", {}).get("winner") for e in events if e.get("event_type") == "game_over"]
            info["game_outcome"] = OUTCOMES.get(winners[-1], "Unfinished") if winners else "Unfinished"

        return info

    def list_runs(self) -> List[Dict[str, Any]]:
        """Every recorded run, newest first."""
        if not self.runs_dir.exists():
            return []
        run_dirs = sorted((d for d in self.runs_dir.iterdir() if d.is_dir()), reverse=True)
        return [self.describe_run(d) for d in run_dirs]
