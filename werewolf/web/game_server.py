"""
Web server exposing a live game session to a browser client.
"""

from typing import Optional, Dict, Any
from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit

from ..session import GameSession


class GameServer:
    """HTTP + SocketIO surface over one GameSession, ticked once per second."""

    def __init__(self, session: GameSession, port: int = 5000, host: str = '127.0.0.1'):
        self.port = port
        self.host = host
        self.session = session

        self.app = Flask(__name__)
        self.socketio = SocketIO(self.app, cors_allowed_origins="*", async_mode='threading')
        self.clients_connected = 0
        self._clock_running = False

        if session.event_emitter:
            session.event_emitter.register_listener(self._broadcast_event)

        self._setup_routes()
        self._setup_socketio()

    def _setup_routes(self):
        """Setup Flask routes."""
        app = self.app

        @app.route('/api/state')
        def get_state():
            return jsonify(self.session.state())

        @app.route('/api/notification')
        def get_notification():
            head = self.session.current_notification()
            return jsonify(head.to_dict() if head else None)

        @app.route('/api/ready', methods=['POST'])
        def ready():
            return self._respond(self.session.ready())

        @app.route('/api/vote', methods=['POST'])
        def vote():
            payload = self._payload()
            target_id = self._player_id(payload, "target_id")
            if target_id is None:
                return jsonify({"error": "target_id must be a player id"}), 400
            if payload.get("voter_id") is None:
                return self._respond(self.session.vote(target_id))
            voter_id = self._player_id(payload, "voter_id")
            if voter_id is None:
                return jsonify({"error": "voter_id must be a player id"}), 400
            return self._respond(self.session.cast_vote(voter_id, target_id))

        @app.route('/api/reveal', methods=['POST'])
        def reveal():
            target_id = self._player_id(self._payload(), "target_id")
            if target_id is None:
                return jsonify({"error": "target_id must be a player id"}), 400
            return self._respond(self.session.reveal_role(target_id))

        @app.route('/api/kill', methods=['POST'])
        def kill():
            player_id = self._player_id(self._payload(), "player_id")
            if player_id is None:
                return jsonify({"error": "player_id must be a player id"}), 400
            return self._respond(self.session.mark_player_dead(player_id))

        @app.route('/api/ack', methods=['POST'])
        def acknowledge():
            popped = self.session.acknowledge_notification()
            return jsonify({
                "acknowledged": popped.to_dict() if popped else None,
                "state": self.session.state(),
            })

        @app.route('/api/name', methods=['POST'])
        def rename():
            name = self.session.set_user_display_name(str(self._payload().get("name", "")))
            return jsonify({"name": name})

    def _setup_socketio(self):
        """Setup SocketIO event handlers."""
        @self.socketio.on('connect')
        def handle_connect():
            self.clients_connected += 1
            print(f"Client connected. Total clients: {self.clients_connected}")
            emit('state', self.session.state())

        @self.socketio.on('disconnect')
        def handle_disconnect():
            self.clients_connected -= 1
            print(f"Client disconnected. Total clients: {self.clients_connected}")

    @staticmethod
    def _payload() -> Dict[str, Any]:
        payload = request.get_json(silent=True)
        return payload if isinstance(payload, dict) else {}

    @staticmethod
    def _player_id(payload: Dict[str, Any], key: str) -> Optional[int]:
        """Integer id under ``key``, or None when absent or not a number."""
        value = payload.get(key)
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    def _respond(self, produced):
        return jsonify({
            "notifications": [n.to_dict() for n in produced],
            "state": self.session.state(),
        })

    def _broadcast_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Broadcast an event to all connected clients."""
        if self.clients_connected > 0:
            self.socketio.emit(event_type, data)

    def _run_clock(self) -> None:
        """Tick the session once per second until it closes."""
        while self._clock_running and not self.session.closed:
            self.socketio.sleep(1)
            self.session.tick()
            if self.clients_connected > 0:
                self.socketio.emit('state', self.session.state())
        self._clock_running = False

    def start_clock(self) -> None:
        if self._clock_running:
            return
        self._clock_running = True
        self.socketio.start_background_task(self._run_clock)

    def stop_clock(self) -> None:
        self._clock_running = False

    def start(self) -> None:
        """Start the clock and the web server."""
        print(f"\n{'='*60}")
        print(f"Starting game server on http://{self.host}:{self.port}")
        print(f"{'='*60}\n")
        self.start_clock()
        try:
            self.socketio.run(self.app, host=self.host, port=self.port, debug=False, allow_unsafe_werkzeug=True)
        finally:
            self.stop_clock()
            self.session.teardown()
