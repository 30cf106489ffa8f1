"""Command-line entry point for the dashboard."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from stockterm.config import AppConfig, ProviderType, load_config_from_env, parse_windows
from stockterm.logging import LogConfig, get_logger, setup_logging

log = get_logger("stockterm.cli")


def _parse_csv_list(s: Optional[str]) -> List[str]:
    if not s:
        return []
    return [x.strip() for x in s.split(",") if x.strip()]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stockterm",
        description="Terminal stock dashboard with candlestick charts.",
    )
    p.add_argument(
        "--provider",
        default=None,
        help="Comma-separated providers in priority order (sina, mock).",
    )
    p.add_argument("--config", default=None, help="Watchlist JSON file.")
    p.add_argument("--refresh", type=float, default=None, help="Quote refresh interval, seconds.")
    p.add_argument("--kline-length", type=int, default=None, help="Bars requested per chart.")
    p.add_argument("--ma", default=None, help="Comma-separated MA windows, e.g. 5,10,20.")
    p.add_argument("--log-level", default=None, help="debug, info, warning, error.")
    p.add_argument("--log-file", default=None, help="Log file path.")
    p.add_argument("--log-json", action="store_true", help="Write JSON log lines.")
    return p


def apply_args(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Overlay command-line flags on an env-derived config."""
    overrides = {}
    providers = _parse_csv_list(args.provider)
    if providers:
        overrides["providers"] = [ProviderType(name.lower()) for name in providers]
    if args.config:
        overrides["watchlist_path"] = Path(args.config).expanduser()
    if args.refresh is not None and args.refresh > 0:
        overrides["refresh_seconds"] = args.refresh
    if args.kline_length is not None and args.kline_length > 0:
        overrides["kline_length"] = args.kline_length
    if args.ma:
        overrides["ma_windows"] = parse_windows(args.ma)
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.log_file:
        overrides["log_file"] = Path(args.log_file).expanduser()
    if args.log_json:
        overrides["log_json"] = True
    return replace(cfg, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = apply_args(load_config_from_env(), args)
    except ValueError as e:
        print(f"stockterm: invalid option: {e}", file=sys.stderr)
        return 2

    # The screen belongs to curses; logs only go to the file.
    setup_logging(LogConfig(
        level=cfg.log_level,
        json=cfg.log_json,
        to_file=str(cfg.log_file) if cfg.log_file else None,
        to_stream=False,
    ))
    log.info("starting stockterm providers=%s watchlist=%s",
             [p.value for p in cfg.providers], cfg.watchlist_path)

    from stockterm.ui import run

    run(cfg)
    log.info("stockterm exited")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
