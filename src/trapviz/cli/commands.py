"""CLI command registration and handlers for trapviz."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from trapviz.config import AppConfig
from trapviz.contracts.error import BadInputError, Exit
from trapviz.ingest import iter_messages, validate_file
from trapviz.replay import replay_messages, replay_realtime
from trapviz.series.metrics import Metric, resolve_metric


@dataclass(frozen=True)
class CLIContext:
    """Runtime hooks supplied by the top-level CLI entrypoint."""

    emit_success: Callable[..., None]
    app_config: Callable[[], AppConfig]
    logger: logging.Logger
    guard: Callable[[Callable[[argparse.Namespace], int]], Callable[[argparse.Namespace], int]]


def register_subcommands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ctx: CLIContext,
) -> dict[str, Callable[[argparse.Namespace], int]]:
    """Define CLI subcommands and return their handlers."""

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {}

    def _register(
        name: str,
        help_text: str,
        configure: Callable[[argparse.ArgumentParser], Callable[[argparse.Namespace], int]],
    ) -> None:
        parser = subparsers.add_parser(name, help=help_text)
        handler = configure(parser)
        handlers[name] = ctx.guard(handler)

    _register(
        "replay",
        "Feed an NDJSON stats capture through the charting loop and print a summary.",
        lambda parser: _configure_replay(parser, ctx),
    )
    _register(
        "validate",
        "Check every line of an NDJSON stats capture.",
        lambda parser: _configure_validate(parser, ctx),
    )
    _register(
        "gui",
        "Launch the chart window (PyQt6).",
        lambda parser: _configure_gui(parser, ctx),
    )
    return handlers


def _metric_arg(value: str) -> Metric:
    return resolve_metric(value)


def _add_metric_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--metric",
        default=Metric.RX_RATE.value,
        help="Metric to chart: " + ", ".join(m.value for m in Metric) + " (default: %(default)s)",
    )


def _configure_replay(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    parser.add_argument("capture", type=Path, help="NDJSON file with one stats message per line")
    _add_metric_option(parser)
    parser.add_argument(
        "--ticks-per-message",
        type=int,
        default=1,
        help="Render ticks fired after each message (default: %(default)s)",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Honour message timestamps and run the scheduler on asyncio",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        help="Playback speed multiplier for --realtime (default: %(default)s)",
    )
    parser.add_argument(
        "--pause-after",
        type=int,
        default=None,
        help="Pause rendering after this many messages (offline replay only)",
    )
    parser.add_argument("--summary-out", help="Optional file to write the JSON summary")

    def handler(args: argparse.Namespace) -> int:
        if args.ticks_per_message < 0:
            raise BadInputError("--ticks-per-message must be >= 0")
        if args.speed <= 0:
            raise BadInputError("--speed must be > 0")
        if args.pause_after is not None and args.pause_after < 1:
            raise BadInputError("--pause-after must be >= 1")
        metric = _metric_arg(args.metric)
        if not args.capture.exists():
            raise FileNotFoundError(f"Capture not found: {args.capture}")
        messages = (message for _idx, message in iter_messages(args.capture))
        cfg = ctx.app_config()
        if args.realtime:
            summary = asyncio.run(replay_realtime(messages, cfg, metric=metric, speed=args.speed))
        else:
            summary = replay_messages(
                messages,
                cfg,
                metric=metric,
                ticks_per_message=args.ticks_per_message,
                pause_after=args.pause_after,
            )
        if args.summary_out:
            Path(args.summary_out).expanduser().write_text(
                json.dumps(summary, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
            )
            ctx.logger.info("Wrote replay summary: %s", args.summary_out)
        ctx.emit_success("replay", text=json.dumps(summary, ensure_ascii=False), data=summary)
        return int(Exit.OK)

    return handler


def _configure_validate(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    parser.add_argument("capture", type=Path, help="NDJSON file to check")

    def handler(args: argparse.Namespace) -> int:
        if not args.capture.exists():
            raise FileNotFoundError(f"Capture not found: {args.capture}")
        problems = validate_file(args.capture)
        for problem in problems:
            print(problem, file=sys.stderr)
        if problems:
            ctx.logger.warning("%d invalid line(s) in %s", len(problems), args.capture)
            return int(Exit.BAD_INPUT)
        ctx.emit_success("validate", text=f"{args.capture}: ok", data={"file": str(args.capture)})
        return int(Exit.OK)

    return handler


def _configure_gui(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    parser.add_argument("--url", default=None, help="HTTP endpoint serving stats messages")
    _add_metric_option(parser)

    def handler(args: argparse.Namespace) -> int:
        from trapviz.gui.app import run_gui

        metric = _metric_arg(args.metric)
        return int(run_gui(ctx.app_config(), url=args.url, metric=metric))

    return handler


__all__ = ["CLIContext", "register_subcommands"]
