"""CLI entry point for the weather lookup client."""

import argparse
import logging
import random
from datetime import datetime

import httpx
from pydantic import ValidationError

from weatherlens.config.loader import load_config
from weatherlens.config.schema import AppConfig
from weatherlens.ingest.owm_client import CityNotFoundError, OpenWeatherMapClient
from weatherlens.models.location import Coordinate
from weatherlens.pipeline.lookup_pipeline import LookupPipeline
from weatherlens.reporting.formatters import (
    format_coordinate_report_json,
    format_coordinate_report_text,
    format_report_json,
    format_report_text,
)
from weatherlens.storage.database import open_store
from weatherlens.storage.recent_searches import RecentSearchStore

DEFAULT_DB = "data/weatherlens.db"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherlens",
        description="Current conditions and 5 day forecast lookup",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")

    sub = parser.add_subparsers(dest="command")

    # weather
    weather_p = sub.add_parser("weather", help="Look up weather by place name")
    weather_p.add_argument("city", help="Place name, e.g. 'London' or 'Paris,FR'")
    weather_p.add_argument("--json", action="store_true", help="JSON output")

    # locate
    locate_p = sub.add_parser("locate", help="Look up weather near a coordinate")
    locate_p.add_argument("lat", type=float)
    locate_p.add_argument("lng", type=float)
    locate_p.add_argument("--radius", type=float, default=None, help="Obfuscation radius (m)")
    locate_p.add_argument("--seed", type=int, default=None, help="Seed the random offset")
    locate_p.add_argument("--json", action="store_true", help="JSON output")

    # recent
    recent_p = sub.add_parser("recent", help="Show recent searches")
    recent_p.add_argument("--clear", action="store_true", help="Forget recent searches")

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except ValidationError as e:
        print(f"Error: invalid config {args.config}:\n{e}")
        return 1
    logging.basicConfig(
        level=config.logging.level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "weather":
        return _cmd_weather(config, args)
    elif args.command == "locate":
        return _cmd_locate(config, args)
    elif args.command == "recent":
        return _cmd_recent(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _store(config: AppConfig, args) -> RecentSearchStore:
    conn = open_store(args.db)
    return RecentSearchStore(
        conn, key=config.recent.storage_key, max_entries=config.recent.max_entries
    )


def _require_api_key(config: AppConfig) -> bool:
    if config.api.api_key:
        return True
    print("Error: no API key (set api.api_key or OPENWEATHER_API_KEY)")
    return False


def _cmd_weather(config: AppConfig, args) -> int:
    if not args.city.strip():
        print("Error: city name is empty")
        return 1
    if not _require_api_key(config):
        return 1

    store = _store(config, args)
    pipeline = LookupPipeline(config, OpenWeatherMapClient.from_config(config.api), store)
    try:
        report = pipeline.by_name(args.city)
    except CityNotFoundError:
        print(f"City not found: {args.city}")
        return 1
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Weather lookup failed for %r: %s", args.city, e)
        print("Failed to fetch weather data. Please try another city.")
        return 1
    finally:
        store.conn.close()

    print(format_report_json(report) if args.json else format_report_text(report))
    return 0


def _cmd_locate(config: AppConfig, args) -> int:
    if not _require_api_key(config):
        return 1
    if not (-90.0 <= args.lat <= 90.0 and -180.0 <= args.lng <= 180.0):
        print("Error: latitude must be in [-90, 90] and longitude in [-180, 180]")
        return 1

    if args.radius is not None:
        config = config.model_copy(
            update={
                "privacy": config.privacy.model_copy(
                    update={"approximate_radius_m": max(args.radius, 0.0)}
                )
            }
        )
    rng = random.Random(args.seed) if args.seed is not None else None

    store = _store(config, args)
    pipeline = LookupPipeline(
        config, OpenWeatherMapClient.from_config(config.api), store, rng=rng
    )
    try:
        result = pipeline.by_coordinate(Coordinate(lat=args.lat, lng=args.lng))
    finally:
        store.conn.close()

    if args.json:
        print(format_coordinate_report_json(result))
    else:
        print(format_coordinate_report_text(result))
    return 0 if result.report is not None else 1


def _cmd_recent(config: AppConfig, args) -> int:
    store = _store(config, args)
    try:
        if args.clear:
            store.clear()
            print("Recent searches cleared")
            return 0
        searches = store.load()
    finally:
        store.conn.close()

    if not searches:
        print("No recent searches")
        return 0
    for s in searches:
        seen = datetime.fromtimestamp(s.timestamp / 1000).strftime("%H:%M")
        print(f"  {s.name} ({seen})")
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        redacted = config.model_copy(
            update={
                "api": config.api.model_copy(
                    update={"api_key": "***" if config.api.api_key else ""}
                )
            }
        )
        print(redacted.model_dump_json(indent=2))
        return 0
    print("Use: config show")
    return 1
