from __future__ import annotations

import argparse
import json
import logging
import os
from typing import Dict, List, Optional

from .errors import CostingError
from .helpers.math import decimal
from .helpers.string import split_assignment, stripped
from .price_model import run_model
from .usage import INBOUND_USAGE_KEY, OUTBOUND_USAGE_KEY, usage_template

LOG_LEVEL_ENV = "ACCELERATOR_COSTING_LOG_LEVEL"


# ---------- Logging ----------

def enable_logging(level: int = logging.INFO) -> None:
    """Configure root logger with a simple, useful format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def _log_level(name: Optional[str]) -> Optional[int]:
    """Numeric level for a name like "debug", or None if logging doesn't know it."""
    level = logging.getLevelName((stripped(name, "INFO") or "INFO").upper())
    return level if isinstance(level, int) else None


# ---------- CLI ----------

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="accelerator-costing",
        description="AWS Global Accelerator costing: lists the cost components for a monthly usage profile.",
    )

    ap.add_argument(
        "--name",
        default="global_accelerator",
        help="Resource name used in cost component names (default: global_accelerator)",
    )
    ap.add_argument(
        "--disabled",
        action="store_true",
        help="Treat the accelerator as disabled (no cost components).",
    )
    ap.add_argument(
        "--inbound",
        action="append",
        default=[],
        metavar="KEY=GB",
        help="Monthly inbound GB for a region pair, e.g. from_europe_to_india=12.5 (repeatable).",
    )
    ap.add_argument(
        "--outbound",
        action="append",
        default=[],
        metavar="KEY=GB",
        help="Monthly outbound GB for a region pair (repeatable).",
    )
    ap.add_argument(
        "--usage-template",
        action="store_true",
        help="Print the usage keys with their default values as JSON and exit.",
    )
    ap.add_argument(
        "--json",
        action="store_true",
        help="Print cost components as JSON instead of a table.",
    )
    ap.add_argument(
        "--log-level",
        default=os.getenv(LOG_LEVEL_ENV, "INFO"),
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or INFO)",
    )
    return ap.parse_args(argv)


def _usage_values(assignments: List[str], option: str) -> Dict[str, str]:
    """
    Turn repeated KEY=GB options into a usage mapping. Bad input exits with
    status 2, the same way argparse reports usage errors.
    """
    out: Dict[str, str] = {}
    for a in assignments:
        try:
            key, value = split_assignment(a)
            if decimal(value) < 0:
                raise ValueError("GB must not be negative")
        except ValueError as e:
            logging.error("Invalid %s value (%s): %s", option, a, e)
            raise SystemExit(2)
        if key in out:
            logging.warning("%s %s given more than once; using the last value", option, key)
        out[key] = value
    return out


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    level = _log_level(args.log_level)
    enable_logging(logging.INFO if level is None else level)
    if level is None:
        logging.warning("Unknown log level %r; using INFO", args.log_level)

    if args.usage_template:
        print(json.dumps(usage_template(), indent=2))
        return

    component = {
        "type": "global_accelerator",
        "name": args.name,
        "enabled": not args.disabled,
        "usage": {
            INBOUND_USAGE_KEY: _usage_values(args.inbound, "--inbound"),
            OUTBOUND_USAGE_KEY: _usage_values(args.outbound, "--outbound"),
        },
    }

    try:
        run_model(components=[component], as_json=args.json)
    except CostingError as e:
        logging.error("%s", e)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
