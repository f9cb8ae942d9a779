#!/usr/bin/env python3
"""Render helper hooks from a JSON config file.

Examples
--------
    deploy-hooks render sqs --config order-queue.json
    deploy-hooks render sns --config topics/order-created.json
    deploy-hooks render event-listener --config listener.json --service-config serverless.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from deploy_hooks.core.validation import HookConfigError
from deploy_hooks.helpers import event_listener, sns_helper, sqs_helper

HELPERS = ("sqs", "sns", "event-listener")


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise HookConfigError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise HookConfigError(f"{path} is not valid JSON: {exc}") from exc


def render(helper: str, config: Any, *, service_config: Optional[dict] = None, global_env_vars: bool = True) -> Any:
    if helper == "sqs":
        return [list(hook) for hook in sqs_helper.build_hooks(config, set_global_env_vars=global_env_vars)]
    if helper == "sns":
        return [list(hook) for hook in sns_helper.build_hooks(config)]
    if helper == "event-listener":
        return event_listener(service_config or {}, config)
    raise HookConfigError(f"Unknown helper: {helper}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deploy-hooks", description="Render deployment hooks from helper configs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Print the hooks built from a helper config as JSON")
    render_parser.add_argument("helper", choices=HELPERS, help="Helper to run")
    render_parser.add_argument("--config", "-c", required=True, help="Path to the helper config (JSON)")
    render_parser.add_argument(
        "--service-config",
        help="Service config (JSON) the event listener is appended to",
    )
    render_parser.add_argument(
        "--no-global-env-vars",
        action="store_true",
        help="Skip the queue URL env vars hook (sqs helper only)",
    )
    render_parser.add_argument("--indent", type=int, default=2, help="JSON indent of the output")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = _read_json(args.config)
        service_config = _read_json(args.service_config) if args.service_config else None
        output = render(
            args.helper,
            config,
            service_config=service_config,
            global_env_vars=not args.no_global_env_vars,
        )
    except HookConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(output, indent=args.indent or None))
    return 0


def entrypoint(argv: Optional[List[str]] = None) -> None:
    sys.exit(main(argv))


if __name__ == "__main__":
    entrypoint()
