"""
Traffic Projection Engine - Entry Point

Project expected arrivals for an airport from saved payloads:
    python main.py --airport KORD --baseline baseline.json --forecast forecast.json
    python main.py --airport KORD --baseline baseline.json --eta 2025-11-27T18:30:00Z

Or import and use programmatically:
    from src.projection import load_airport, ProjectionEngine

Environment variables:
    PROJECTION_DEFAULT_AIRPORT: Airport used when --airport is omitted
    PROJECTION_DST_FALLBACK: summer | month_estimate
    LOG_LEVEL: Log level (default: INFO)
"""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

from src.utils.logger import configure_logging, logger
from src.utils.exceptions import MissingConfigError, PayloadError
from src.projection.config import settings

load_dotenv()


def _parse_instant(value: str) -> datetime:
    instant = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def _read_json(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main() -> int:
    """Main entry point for the projection CLI."""
    parser = argparse.ArgumentParser(
        description="Airport Traffic Projection Engine"
    )
    parser.add_argument("--airport", default=None, help="ICAO airport code (default: from settings)")
    parser.add_argument("--baseline", type=Path, required=True, help="Baseline payload JSON file")
    parser.add_argument("--forecast", type=Path, default=None, help="Forecast payload JSON file")
    parser.add_argument("--now", type=_parse_instant, default=None, help="Frozen now, ISO-8601 UTC (default: current time)")
    parser.add_argument("--eta", type=_parse_instant, default=None, help="Selected ETA, ISO-8601 UTC (default: now)")
    parser.add_argument("--csv", type=Path, default=None, help="Write projected slots to a CSV file")
    parser.add_argument(
        "--timeline",
        action="store_true",
        help="Also print the full-day baseline timeline for the ETA",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (default: from settings)",
    )

    args = parser.parse_args()

    configure_logging(settings.logging, level=args.log_level)

    from src.projection import (
        NoProjection,
        NotFound,
        ProjectionEngine,
        build_baseline_timeline,
        format_local_time,
        load_airport,
        load_forecast,
        projection_to_frame,
        timeline_to_frame,
    )

    try:
        airport = args.airport or settings.projection.default_airport
        if not airport:
            raise MissingConfigError("PROJECTION_DEFAULT_AIRPORT")

        clock, baseline = load_airport(airport, _read_json(args.baseline), version=1)
        loaded = load_forecast(_read_json(args.forecast), version=1) if args.forecast else load_forecast(None)
    except (MissingConfigError, PayloadError, OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not load inputs: {e}")
        return 1

    now = args.now or datetime.now(timezone.utc)
    eta = args.eta or now

    logger.info("=" * 60)
    logger.info(f"TRAFFIC PROJECTION | {airport}")
    logger.info("=" * 60)
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Now: {now.isoformat()} | ETA: {eta.isoformat()}")
    logger.info(f"Airport time: {format_local_time(now, clock)} | ETA {format_local_time(eta, clock)}")

    engine = ProjectionEngine(clock, baseline)
    result = engine.project(loaded.forecast, loaded.actuals, now=now, eta=eta, diagnostics=loaded.diagnostics)

    if isinstance(result, NoProjection):
        logger.warning(f"No projection available: {result.reason}")
        return 2

    if result.diagnostics:
        logger.info(f"Diagnostics: {', '.join(d.code for d in result.diagnostics)}")

    logger.info(f"Baseline: {', '.join(result.baseline_labels) or 'none'}")
    logger.info(f"Window: {result.window.start_hours:+.2f}h to {result.window.end_hours:+.2f}h ({len(result.slots)} slots)")
    logger.info(f"Expected now: {result.now.value} (slot index {result.now.index})")
    logger.info(f"Expected at ETA: {result.eta.value} (slot index {result.eta.index})")

    df = projection_to_frame(result)
    print(df)

    if args.csv:
        df.write_csv(args.csv)
        logger.info(f"Projection written to {args.csv}")

    if args.timeline:
        timeline = build_baseline_timeline(clock, baseline, eta)
        if isinstance(timeline, NotFound):
            logger.warning(f"No baseline timeline: {timeline.reason}")
        else:
            logger.info(timeline.title)
            print(timeline_to_frame(timeline))

    return 0


if __name__ == "__main__":
    sys.exit(main())
