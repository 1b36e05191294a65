"""
Replay server: serves recorded runs to a browser viewer.
"""

import json
from pathlib import Path
from flask import Flask, jsonify, request

from .run_recorder import RunRecorder, EVENTS_FILE, METADATA_FILE


class ViewerServer:
    """Read-only HTTP view over the runs directory."""

    def __init__(self, port: int = 5000, host: str = '127.0.0.1', runs_dir: str = "runs"):
        self.port = port
        self.host = host
        self.runs_dir = Path(runs_dir)
        self.run_recorder = RunRecorder(runs_dir=runs_dir)

        self.app = Flask(__name__)
        self._register_routes()

    def _load(self, run_name: str, filename: str, reader):
        """Read one file of a run, or produce the matching error response."""
        path = self.runs_dir / run_name / filename
        if not path.exists():
            return None, (jsonify({"error": f"Run '{run_name}' not found"}), 404)
        try:
            return reader(path), None
        except (OSError, json.JSONDecodeError) as e:
            return None, (jsonify({"error": str(e)}), 500)

    def _register_routes(self):
        app = self.app

        @app.route('/api/runs')
        def runs():
            return jsonify(self.run_recorder.list_runs())

        @app.route('/api/runs/<run_name>/events')
        def run_events(run_name: str):
            events, error = self._load(run_name, EVENTS_FILE, RunRecorder.read_events)
            return error or jsonify(events)

        @app.route('/api/runs/<run_name>/metadata')
        def run_metadata(run_name: str):
            metadata, error = self._load(run_name, METADATA_FILE, RunRecorder.read_metadata)
            return error or jsonify(metadata)

        @app.route('/api/runs/<run_name>/events/stream')
        def run_events_since(run_name: str):
            """Events after ``last_position``, for clients polling a game in progress."""
            events, error = self._load(run_name, EVENTS_FILE, RunRecorder.read_events)
            if error:
                return error
            since = request.args.get('last_position', 0, type=int)
            return jsonify({"events": events[since:], "position": len(events)})

    def start(self) -> None:
        print(f"Replay viewer on http://{self.host}:{self.port} (runs in {self.runs_dir}/)")
        self.app.run(host=self.host, port=self.port, debug=False, use_reloader=False)
