"""
Main entry point for running the attacking proxy as a UCI engine.

Usage:
    python -m attacking_engine.uci [ENGINE_PATH] [--log-file PATH] [--debug]
"""

import argparse
from pathlib import Path

from attacking_engine.session.options import EngineOptions
from attacking_engine.uci.interface import DEFAULT_LOG_FILE, UCIEngine, setup_logger


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="UCI proxy that plays the most attacking of the wrapped engine's good moves"
    )
    parser.add_argument(
        "engine",
        nargs="?",
        default=EngineOptions.engine_path,
        help="Path or command name of the wrapped UCI engine (default: %(default)s)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=DEFAULT_LOG_FILE,
        help="Log file (default: %(default)s)",
    )
    parser.add_argument("--no-log", action="store_true", help="Disable the log file")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args(argv)

    setup_logger(None if args.no_log else args.log_file, debug=args.debug)

    engine = UCIEngine(options=EngineOptions(engine_path=args.engine))
    engine.run()


if __name__ == "__main__":
    main()
