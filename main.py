"""
Main game loop for Werewolf village.
"""

import argparse
import dataclasses
import random
from typing import Dict, Optional, Set, Tuple

from dotenv import load_dotenv

from werewolf.core import Role, GamePhase, Notification, NotificationType
from werewolf.agents import BaseAgent, DummyAgent
from werewolf.config.game_config import GameConfig, default_config
from werewolf.config.config_loader import load_config
from werewolf.session import GameSession
from werewolf.web import EventEmitter, RunRecorder


class WerewolfGame:
    """Headless game controller: bots play every seat, popups go to the terminal."""

    def __init__(self, config: Optional[GameConfig] = None, event_emitter: Optional[EventEmitter] = None,
                 run_name: Optional[str] = None):
        # Private copy: the seed below must not leak into the shared defaults
        self.config = config or dataclasses.replace(default_config)
        self.run_recorder: Optional[RunRecorder] = None

        if event_emitter is None:
            if self.config.record_runs:
                self.run_recorder = RunRecorder(self.config.runs_dir)
                run_name = self.run_recorder.create_run(run_name)
                print(f"Recording game to: {self.config.runs_dir}/{run_name}/")
            event_emitter = EventEmitter(self.run_recorder)
        else:
            self.run_recorder = event_emitter.run_recorder
        self.event_emitter = event_emitter

        # Generate seed if not provided
        if self.config.random_seed is None:
            self.config.random_seed = random.randint(0, 2**31 - 1)

        self.session = GameSession(self.config, event_emitter=self.event_emitter)
        self.game_state = self.session.game_state
        self.agents: Dict[int, BaseAgent] = {}
        self._acted: Set[Tuple[int, Role]] = set()
        self.delivered: list = []

        self._initialize_agents()

    def _initialize_agents(self):
        """Create a bot for every seat, the user's included."""
        agent_type = self.config.agent_type.lower()
        if agent_type != "dummy_agent":
            raise ValueError(f"Unknown agent_type: {agent_type}. Must be 'dummy_agent'")
        for player in self.game_state.players:
            self.agents[player.player_id] = DummyAgent(player, self.config)

    def _play_bots(self) -> None:
        """Let every bot with something to do act once."""
        round_state = self.game_state.round
        if round_state.phase == GamePhase.NIGHT and isinstance(round_state.current_turn, Role):
            role = round_state.current_turn
            key = (round_state.day_number, role)
            if key in self._acted:
                return
            self._acted.add(key)
            for player in self.game_state.roster.find_by_role(role):
                agent = self.agents[player.player_id]
                if not agent.acts_at_night():
                    continue
                target = agent.get_night_target(agent.build_context(self.game_state))
                if target is None:
                    continue
                if role == Role.SEER:
                    self.session.reveal_role(target)
                elif role == Role.GUARD:
                    self.session.protect_player(target)
                elif role == Role.WEREWOLF:
                    self.session.night_kill(target)
        elif round_state.is_voting:
            for player in self.game_state.get_alive_players():
                agent = self.agents[player.player_id]
                target = agent.get_vote_choice(agent.build_context(self.game_state))
                if target is not None:
                    self.session.cast_vote(player.player_id, target)
                if not self.game_state.round.is_voting:
                    break

    def _drain_notifications(self) -> None:
        """Show and acknowledge every queued popup, oldest first."""
        while not self.session.closed:
            head = self.session.current_notification()
            if head is None:
                return
            self._print_notification(head)
            self.delivered.append(head)
            self.session.acknowledge_notification()

    def _print_notification(self, notification: Notification) -> None:
        marker = "🏁" if notification.type == NotificationType.GAME_OVER else "•"
        clock = self.game_state.round.clock
        print(f"[{clock}] {marker} {notification.title} {notification.message}")

    def run_game(self, max_ticks: int = 5000) -> str:
        """
        Run the game until game over or the tick budget runs out.
        Returns winning team name.
        """
        print("=" * 60)
        print("WEREWOLF - Starting")
        print("=" * 60)
        for player in self.game_state.players:
            marker = " (you)" if player.is_controlled_by_user else ""
            print(f"  {player.player_id}. {player.name}: {player.role.title}{marker}")
        print("=" * 60)

        if self.run_recorder:
            self.run_recorder.save_metadata({
                "players": self.game_state.roster.snapshot(),
                "config": {
                    "day_voting_duration": self.config.day_voting_duration,
                    "turn_duration": self.config.turn_duration,
                    "random_seed": self.config.random_seed,
                },
            })

        self._drain_notifications()
        self.session.ready()
        ticks = 0
        while not self.session.closed and ticks < max_ticks:
            self._play_bots()
            self._drain_notifications()
            if self.session.closed:
                break
            self.session.tick()
            ticks += 1
            self._drain_notifications()

        self._print_game_summary()
        winner = self.game_state.winner
        if winner is None:
            return "Unfinished"
        return "Village" if winner.value == "village" else "Werewolves"

    def _print_game_summary(self) -> None:
        """Print a nicely formatted game summary."""
        print("\n📊 GAME SUMMARY")
        print("-" * 60)
        winner = self.game_state.winner
        if winner:
            print(f"Winner: {'Village' if winner.value == 'village' else 'Werewolves'}")
        else:
            print("Winner: None (tick budget exhausted)")
        print(f"Days played: {self.game_state.day_number}")
        print(f"Random Seed: {self.config.random_seed}")

        counts = self.game_state.roster.counts()
        print(f"\nAlive: {counts['alive_total']} "
              f"(werewolves {counts['alive_werewolves']}, others {counts['alive_non_werewolves']})")

        dead = self.game_state.roster.get_dead_players()
        if dead:
            print(f"\nDead Players ({len(dead)}):")
            for player in dead:
                cause = next(
                    (a["data"]["cause"] for a in self.game_state.action_log
                     if a["type"] == "player_died" and a["data"]["player"] == player.player_id),
                    "unknown",
                )
                print(f"  • {player.name}: {player.role.title} - {cause}")


def main():
    """Entry point for running a game."""
    parser = argparse.ArgumentParser(
        description="Run a Werewolf village game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                               # Headless game, bots play every seat
  python main.py --config configs/quick.yaml   # Short timers
  python main.py --serve --port 8080           # Live session for a browser client
        """
    )
    parser.add_argument("--config", "-c", type=str, default=None,
                        help="Path to YAML configuration file (default: use default config)")
    parser.add_argument("--seed", "-s", type=int, default=None,
                        help="Random seed for reproducible bot choices")
    parser.add_argument("--run-name", "-r", type=str, default=None,
                        help="Custom name for this run (default: auto-generated timestamp)")
    parser.add_argument("--max-ticks", type=int, default=5000,
                        help="Stop a headless game after this many clock ticks")
    parser.add_argument("--name", "-n", type=str, default="",
                        help="Display name for your seat")
    parser.add_argument("--serve", action="store_true",
                        help="Serve a live session over HTTP/SocketIO instead of playing headless")
    parser.add_argument("--host", type=str, default='127.0.0.1')
    parser.add_argument("--port", "-p", type=int, default=5000)

    args = parser.parse_args()
    load_dotenv()

    config = load_config(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config.random_seed = args.seed

    if args.serve:
        from werewolf.web.game_server import GameServer

        recorder = None
        if config.record_runs:
            recorder = RunRecorder(config.runs_dir)
            recorder.create_run(args.run_name)
        session = GameSession(config, event_emitter=EventEmitter(recorder))
        session.set_user_display_name(args.name)
        GameServer(session, port=args.port, host=args.host).start()
        return

    game = WerewolfGame(config=config, run_name=args.run_name)
    game.session.set_user_display_name(args.name)
    winner = game.run_game(max_ticks=args.max_ticks)
    print(f"\nResult: {winner}")

    if game.run_recorder:
        run_path = game.run_recorder.get_run_path()
        if run_path:
            print(f"\nGame events saved to: {run_path}")


if __name__ == "__main__":
    main()
