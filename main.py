#!/usr/bin/env python3

"""
Command-line entry point for the Groundcast forecasting engine: reads a JSON history file and prints the forecast report.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from config import settings
from services.forecast_service import build_forecast_report

log = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Forecast groundwater levels from a history file")
    parser.add_argument("history", type=Path, help="JSON file holding a list of {date, water_level} records")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Base date for the forecasts (YYYY-MM-DD, defaults to today)",
    )
    parser.add_argument("--category", default=None, help="Current stress category (derived when omitted)")
    parser.add_argument("--current-level", type=float, default=None, help="Current depth below ground (m)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation of the printed report")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    args = _parse_args(argv)

    try:
        history = json.loads(args.history.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        log.error("Could not read history from %s: %s", args.history, exc)
        return 1

    report = build_forecast_report(
        history,
        args.as_of or date.today(),
        current_water_level=args.current_level,
        category=args.category,
    )
    print(report.model_dump_json(indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
