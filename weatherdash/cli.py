"""CLI entry point for the weather dashboard."""

import argparse
import asyncio
import logging

from weatherdash.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from weatherdash.context import AppContext, open_context
from weatherdash.forecast.query import coordinate_query_text
from weatherdash.ingest.errors import ProviderError
from weatherdash.models.location import NewLocation
from weatherdash.reporting.formatters import (
    format_geocoding_text,
    format_locations_text,
    format_snapshot_text,
)
from weatherdash.session.weather_session import SessionStatus
from weatherdash.storage.location_repo import new_location_from_geocoding

DEFAULT_CONFIG = "config/weatherdash.yaml"
DEFAULT_DB = "data/weatherdash.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdash",
        description="Weather dashboard: conditions, forecasts and saved locations",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Config YAML path")
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # weather
    weather_p = sub.add_parser("weather", help="Show weather for a place or 'lat,lon'")
    weather_p.add_argument("query", help="Place name, 'lat,lon' or saved location id")

    # locations list / add / remove
    loc_p = sub.add_parser("locations", help="Saved location operations")
    loc_sub = loc_p.add_subparsers(dest="locations_command")
    list_p = loc_sub.add_parser("list", help="List saved locations")
    which = list_p.add_mutually_exclusive_group()
    which.add_argument("--featured", action="store_true", help="Featured only")
    which.add_argument("--custom", action="store_true", help="Custom only")
    add_p = loc_sub.add_parser("add", help="Add a custom location")
    add_p.add_argument("--search", help="Geocode a place name and add the first match")
    add_p.add_argument("name", nargs="?")
    add_p.add_argument("country", nargs="?")
    add_p.add_argument("lat", nargs="?", type=float)
    add_p.add_argument("lon", nargs="?", type=float)
    add_p.add_argument("--description", default="")
    rm_p = loc_sub.add_parser("remove", help="Delete a custom location")
    rm_p.add_argument("id")

    # geocode
    geo_p = sub.add_parser("geocode", help="Look up places by name")
    geo_p.add_argument("query")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set and save a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "config":
        return _cmd_config(config, args)

    with open_context(config, args.db) as ctx:
        if args.command == "weather":
            return _cmd_weather(ctx, args)
        elif args.command == "locations":
            return _cmd_locations(ctx, args)
        elif args.command == "geocode":
            return _cmd_geocode(ctx, args)
    parser.print_help()
    return 1


def _cmd_weather(ctx: AppContext, args) -> int:
    query = args.query
    saved = ctx.locations.get_by_id(query)
    if saved is not None:
        query = coordinate_query_text(saved.lat, saved.lon)

    session = ctx.new_session()
    status = asyncio.run(session.search_location(query))
    if status != SessionStatus.READY or session.snapshot is None:
        print(f"Error: {session.error}")
        return 1
    print(format_snapshot_text(session.snapshot, ctx.config.display))
    return 0


def _cmd_locations(ctx: AppContext, args) -> int:
    if args.locations_command == "list":
        if args.featured:
            locations = ctx.locations.list_featured()
        elif args.custom:
            locations = ctx.locations.list_custom()
        else:
            locations = ctx.locations.list_all()
        print(format_locations_text(locations))
        return 0
    elif args.locations_command == "add":
        return _cmd_locations_add(ctx, args)
    elif args.locations_command == "remove":
        if ctx.locations.delete_by_id(args.id):
            print(f"Removed {args.id}")
            return 0
        print(f"Error: no custom location with id {args.id}")
        return 1
    else:
        print("Use: locations list | locations add | locations remove ID")
        return 1


def _cmd_locations_add(ctx: AppContext, args) -> int:
    if args.search:
        try:
            results = asyncio.run(ctx.provider.geocode(args.search))
        except ProviderError as e:
            print(f"Error: {e.message}")
            return 1
        if not results:
            print(f"Error: no match for {args.search!r}")
            return 1
        new = new_location_from_geocoding(results[0])
    else:
        if args.name is None or args.country is None or args.lat is None or args.lon is None:
            print("Error: give NAME COUNTRY LAT LON or --search QUERY")
            return 1
        new = NewLocation(
            name=args.name,
            country=args.country,
            lat=args.lat,
            lon=args.lon,
            description=args.description,
        )

    location = ctx.locations.insert(new)
    if location is None:
        print("Error: location was not saved")
        return 1
    print(f"Added {location.name}, {location.country} ({location.id})")
    return 0


def _cmd_geocode(ctx: AppContext, args) -> int:
    try:
        results = asyncio.run(ctx.provider.geocode(args.query))
    except ProviderError as e:
        print(f"Error: {e.message}")
        return 1
    print(format_geocoding_text(results))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        if config.provider.api_key:
            config = config.model_copy(
                update={"provider": config.provider.model_copy(update={"api_key": "***"})}
            )
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
