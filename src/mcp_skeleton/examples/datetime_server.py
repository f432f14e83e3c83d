"""Example: date/time information MCP server.

Registers its tools with the explicit schema builders and dispatches tool
calls by name.
"""

import argparse
import math
import sys
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mcp_skeleton import (
    McpServer,
    ServerIdentity,
    ToolExecutionError,
    create_input_schema,
    create_property,
    describe_tools,
)

IDENTITY = ServerIdentity(name="datetime-mcp-server", version="1.0.0")

# Tokyo
DEFAULT_LATITUDE = 35.6762
DEFAULT_LONGITUDE = 139.6503

# Julian date of the Unix epoch and of J2000.0
_JD_UNIX_EPOCH = 2440587.5
_JD_2000 = 2451545.0


def setup_tools(server: McpServer) -> None:
    server.register_tool(
        "sunset_time",
        "Get sunset time for today",
        create_input_schema({
            "latitude": create_property("number", "Latitude", DEFAULT_LATITUDE),
            "longitude": create_property("number", "Longitude", DEFAULT_LONGITUDE),
        }),
    )
    server.register_tool(
        "days_remaining",
        "Get remaining days in current year",
        create_input_schema(),
    )
    server.register_tool(
        "current_time",
        "Get current time with timezone",
        create_input_schema({
            "timezone": create_property("string", "Timezone", "UTC"),
        }),
    )


def sunset_utc(day: date, latitude: float, longitude: float) -> Optional[datetime]:
    """Compute the sunset for ``day`` using the sunrise equation.

    Args:
        day: Calendar day (UTC)
        latitude: Degrees north
        longitude: Degrees east

    Returns:
        Sunset as an aware UTC datetime, or None when the sun does not set
        or does not rise that day.
    """
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    julian_date = midnight.timestamp() / 86400 + _JD_UNIX_EPOCH
    n = math.ceil(julian_date - _JD_2000 + 0.0008)

    mean_solar_noon = n - longitude / 360
    anomaly = math.radians((357.5291 + 0.98560028 * mean_solar_noon) % 360)
    center = 1.9148 * math.sin(anomaly) + 0.02 * math.sin(2 * anomaly) + 0.0003 * math.sin(3 * anomaly)
    ecliptic_longitude = math.radians((math.degrees(anomaly) + center + 180 + 102.9372) % 360)
    transit = _JD_2000 + mean_solar_noon + 0.0053 * math.sin(anomaly) - 0.0069 * math.sin(2 * ecliptic_longitude)

    sin_declination = math.sin(ecliptic_longitude) * math.sin(math.radians(23.4397))
    cos_declination = math.cos(math.asin(sin_declination))
    lat = math.radians(latitude)
    cos_hour_angle = (math.sin(math.radians(-0.833)) - math.sin(lat) * sin_declination) / (
        math.cos(lat) * cos_declination
    )
    if not -1.0 <= cos_hour_angle <= 1.0:
        return None

    julian_sunset = transit + math.degrees(math.acos(cos_hour_angle)) / 360
    return datetime.fromtimestamp((julian_sunset - _JD_UNIX_EPOCH) * 86400, tz=timezone.utc)


def execute_tool(name: str, arguments: Dict[str, Any]) -> str:
    if name == "sunset_time":
        lat = arguments.get("latitude", DEFAULT_LATITUDE)
        lng = arguments.get("longitude", DEFAULT_LONGITUDE)
        sunset = sunset_utc(datetime.now(timezone.utc).date(), float(lat), float(lng))
        if sunset is None:
            return f"No sunset today (lat: {lat}, lng: {lng})"
        return f"Sunset time: {sunset.strftime('%H:%M:%S')} UTC (lat: {lat}, lng: {lng})"

    if name == "days_remaining":
        today = date.today()
        remaining = (date(today.year, 12, 31) - today).days
        return f"Days remaining in {today.year}: {remaining} days"

    if name == "current_time":
        tz = arguments.get("timezone", "UTC")
        try:
            now = datetime.now(ZoneInfo(tz))
        except (ZoneInfoNotFoundError, ValueError, TypeError, OSError):
            return f"Error: Invalid timezone '{tz}'"
        return f"Current time: {now.strftime('%Y-%m-%d %H:%M:%S %Z')}"

    raise ToolExecutionError(f"Unknown tool: {name}")


def create_server(**kwargs: Any) -> McpServer:
    return McpServer(IDENTITY, setup_tools, execute_tool, **kwargs)


def main(args: Optional[List[str]] = None) -> None:
    """Entry point for the date/time server."""
    parser = argparse.ArgumentParser(prog=IDENTITY.name, description=f"{IDENTITY.name} - MCP server")
    parser.add_argument("--describe", action="store_true", help="Show available tools and their parameters")
    parsed_args = parser.parse_args(args)

    server = create_server()
    if parsed_args.describe:
        describe_tools(server)
        sys.exit(0)

    server.serve()


if __name__ == "__main__":
    main()
