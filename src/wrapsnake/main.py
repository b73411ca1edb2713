# main.py
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

from .config import CFG, Config, make_rng

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wrapsnake",
        description="Snake on a wraparound grid, in a window or in the terminal",
    )
    parser.add_argument("--seed", type=int, default=CFG.seed, help="seed for food placement")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="write logs here (the terminal UI discards logs otherwise)",
    )

    subparsers = parser.add_subparsers(dest="mode", required=True)

    gui_p = subparsers.add_parser("gui", help="Play in a pygame window")
    gui_p.add_argument(
        "--move-ms",
        type=int,
        default=CFG.move_every_ms,
        help="milliseconds between snake steps",
    )

    con_p = subparsers.add_parser("console", help="Play in the terminal")
    con_p.add_argument("--fps", type=int, default=CFG.console_fps, help="frames (and steps) per second")
    con_p.add_argument("--sound", action="store_true", help="play sound effects")

    return parser


def configure_logging(level: str, log_file: Optional[str], mode: str) -> None:
    if log_file is None and mode == "console":
        # curses owns the terminal
        logging.basicConfig(level=level, handlers=[logging.NullHandler()])
        return
    logging.basicConfig(
        level=level,
        filename=log_file,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def config_from_args(args: argparse.Namespace) -> Config:
    cfg = dataclasses.replace(CFG, seed=args.seed)
    if args.mode == "gui":
        cfg = dataclasses.replace(cfg, move_every_ms=args.move_ms)
    else:
        cfg = dataclasses.replace(cfg, console_fps=args.fps)
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file, args.mode)
    cfg = config_from_args(args)
    rng = make_rng(cfg.seed)
    logger.info("starting %s mode (seed=%s)", args.mode, cfg.seed)

    if args.mode == "gui":
        from .game import run as run_gui
        score = run_gui(cfg, rng=rng)
    else:
        from .console import TerminalTooSmall, run as run_console
        try:
            score = run_console(cfg, sound=args.sound, rng=rng)
        except TerminalTooSmall as exc:
            print(f"wrapsnake: {exc}", file=sys.stderr)
            return 1

    print(f"Score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
