"""
Replay viewer for recorded Werewolf games.

    python viewer.py                    # serve runs/ on 127.0.0.1:5000
    python viewer.py --list             # print recorded runs and exit
    python viewer.py --runs-dir other --port 8080
"""

import argparse
from werewolf.web.viewer_server import ViewerServer


def main():
    parser = argparse.ArgumentParser(description="Browse recorded Werewolf games")
    parser.add_argument("--runs-dir", type=str, default="runs",
                        help="Directory holding recorded runs (default: runs)")
    parser.add_argument("--host", type=str, default='127.0.0.1')
    parser.add_argument("--port", "-p", type=int, default=5000)
    parser.add_argument("--list", action="store_true",
                        help="Print the recorded runs instead of serving them")
    args = parser.parse_args()

    server = ViewerServer(port=args.port, host=args.host, runs_dir=args.runs_dir)
    if args.list:
        for run in server.run_recorder.list_runs():
            outcome = run.get("game_outcome", "No events")
            print(f"{run['name']:<28} {run.get('event_count', 0):>5} events  {outcome}")
        return
    server.start()


if __name__ == "__main__":
    main()
