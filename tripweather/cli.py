"""CLI entry point for the trip weather service."""

import argparse
import asyncio
import logging

from tripweather.config.loader import get_config_value, load_config, set_config_value
from tripweather.config.schema import WeatherConfig
from tripweather.ingest.location import parse_location_arg
from tripweather.ingest.staleness import entry_age_minutes
from tripweather.models.common import Namespace
from tripweather.models.result import Err
from tripweather.reporting.formatters import (
    combined_to_dict,
    format_forecast_text,
    format_json,
    result_to_dict,
)
from tripweather.service import (
    WeatherService,
    get_weather_icon_url,
    is_api_key_valid,
    open_session_storage,
)
from tripweather.storage.cache_store import CacheStore
from tripweather.storage.session_storage import SqliteSessionStorage

DEFAULT_CONFIG = "config/tripweather.yaml"
SECRET_KEYS = {"api.api_key"}
REDACTED = "***"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="tripweather",
        description="Weather lookups with session caching for trip planning",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="Session SQLite DB path")
    parser.add_argument(
        "--no-retry", action="store_true", help="Make a single attempt per request"
    )

    sub = parser.add_subparsers(dest="command")

    current_p = sub.add_parser("current", help="Current conditions for a location")
    current_p.add_argument("location", help='Place name or "lat,lon"')

    forecast_p = sub.add_parser("forecast", help="Daily forecast for a location")
    forecast_p.add_argument("location", help='Place name or "lat,lon"')
    forecast_p.add_argument("--json", action="store_true", help="Print JSON")

    data_p = sub.add_parser("data", help="Current conditions and forecast together")
    data_p.add_argument("location", help='Place name or "lat,lon"')

    nearby_p = sub.add_parser("nearby", help="Geocoding candidates for a place name")
    nearby_p.add_argument("name")

    icon_p = sub.add_parser("icon", help="Icon URL for a condition code")
    icon_p.add_argument("code")

    sub.add_parser("check-key", help="Check that an API key is configured")

    # cache show / cache clear
    cache_p = sub.add_parser("cache", help="Session cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("show", help="List cached locations")
    clear_p = cache_sub.add_parser("clear", help="Empty the cache")
    clear_p.add_argument(
        "--namespace", choices=[ns.value for ns in Namespace], default=None
    )

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.db:
        config = set_config_value(config, "cache.db_path", args.db)

    if args.command == "icon":
        print(get_weather_icon_url(args.code, config.api.icon_base_url))
        return 0
    elif args.command == "check-key":
        return _cmd_check_key(config)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "cache":
        return _cmd_cache(config, args)
    elif args.command in ("current", "forecast", "data", "nearby"):
        return asyncio.run(_run_lookup(config, args))
    else:
        parser.print_help()
        return 1


async def _run_lookup(config: WeatherConfig, args) -> int:
    use_retry = not args.no_retry
    async with WeatherService.from_config(config) as service:
        if args.command == "current":
            result = await service.get_current_weather(
                parse_location_arg(args.location), use_retry
            )
            print(format_json(result_to_dict(result)))
            return 0 if result is not None and not isinstance(result, Err) else 1

        if args.command == "forecast":
            result = await service.get_weather_forecast(
                parse_location_arg(args.location), use_retry
            )
            if args.json or result is None or isinstance(result, Err):
                print(format_json(result_to_dict(result)))
            else:
                print(format_forecast_text(result.value))
            return 0 if result is not None and not isinstance(result, Err) else 1

        if args.command == "data":
            combined = await service.get_weather_data(parse_location_arg(args.location))
            print(format_json(combined_to_dict(combined)))
            return 0 if combined.error is None else 1

        cities = await service.find_nearby_cities(args.name)
        print(format_json([vars(c) for c in cities or []]))
        return 0 if cities else 1


def _cmd_check_key(config: WeatherConfig) -> int:
    valid = is_api_key_valid(config.api.api_key)
    print(f"API key: {'OK' if valid else 'MISSING or too short'}")
    return 0 if valid else 1


def _cmd_cache(config: WeatherConfig, args) -> int:
    storage = open_session_storage(config)
    cache = CacheStore(storage)
    try:
        if args.cache_command == "show":
            for ns in Namespace:
                keys = cache.keys(ns)
                print(f"{ns.value}: {len(keys)} entries")
                for key in keys:
                    entry = cache.get(ns, key)
                    print(f"  {key} ({entry_age_minutes(entry):.0f} min old)")
            return 0
        elif args.cache_command == "clear":
            namespace = Namespace(args.namespace) if args.namespace else None
            cache.clear(namespace)
            print(f"Cleared {args.namespace or 'all'} cache")
            return 0
        else:
            print("Use: cache show | cache clear [--namespace NS]")
            return 1
    finally:
        if isinstance(storage, SqliteSessionStorage):
            storage.close()


def _cmd_config(config: WeatherConfig, args) -> int:
    if args.config_command == "show":
        data = config.model_dump(mode="json")
        if data["api"]["api_key"]:
            data["api"]["api_key"] = REDACTED
        print(format_json(data))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            shown = get_config_value(new_config, key.strip())
            if key.strip() in SECRET_KEYS and shown:
                shown = REDACTED
            print(f"Set {key} = {shown}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
