"""Output formatters for weather reports and map resolutions."""

import json
from dataclasses import asdict
from datetime import UTC, datetime, timedelta

from weatherlens.config.schema import Units
from weatherlens.models.location import LocationResolution
from weatherlens.pipeline.lookup_pipeline import CoordinateReport, WeatherReport

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

# (temperature, compact temperature, wind speed) labels per OpenWeatherMap units system
UNIT_LABELS = {
    Units.METRIC: ("°C", "°", "m/s"),
    Units.IMPERIAL: ("°F", "°", "mph"),
    Units.STANDARD: ("K", "K", "m/s"),
}


def condition_glyph(weather_code: int, is_day: bool = True) -> str:
    """Map an OpenWeatherMap condition code to a display glyph."""
    if 200 <= weather_code < 300:
        return "⚡"
    if 300 <= weather_code < 600:
        return "🌧️"
    if 600 <= weather_code < 700:
        return "❄️"
    if 700 <= weather_code < 800:
        return "🌫️"
    if weather_code == 800:
        return "☀️" if is_day else "🌙"
    if weather_code == 801:
        return "🌤️" if is_day else "☁️"
    if weather_code == 802:
        return "⛅"
    if weather_code > 802:
        return "☁️"
    return "🌡️"


def wind_direction(degrees: float) -> str:
    """16-point compass label for a wind bearing."""
    return COMPASS_POINTS[round(degrees / 22.5) % 16]


def location_time(timestamp: int, utc_offset: int) -> datetime:
    """Wall-clock time at a location with the given UTC offset (seconds)."""
    return datetime.fromtimestamp(timestamp, UTC) + timedelta(seconds=utc_offset)


def format_local_time(timestamp: int, utc_offset: int) -> str:
    return location_time(timestamp, utc_offset).strftime("%H:%M")


def is_daytime(now_ts: int, sunrise: int, sunset: int, utc_offset: int) -> bool:
    """Compare whole hours at the location against sunrise/sunset hours."""
    hour = location_time(now_ts, utc_offset).hour
    return location_time(sunrise, utc_offset).hour < hour < location_time(sunset, utc_offset).hour


def format_report_text(report: WeatherReport, now_ts: int | None = None) -> str:
    """Plain text weather report for the console."""
    c = report.current
    if now_ts is None:
        now_ts = int(datetime.now(UTC).timestamp())
    day = is_daytime(now_ts, c.sunrise, c.sunset, c.utc_offset)
    temp_unit, temp_mark, speed_unit = UNIT_LABELS[report.units]

    lines = [
        f"=== {c.name}, {c.country} ===",
        f"{condition_glyph(c.weather_code, day)} {round(c.temperature)}{temp_unit} "
        f"(feels like {round(c.feels_like)}{temp_unit}) {c.description}",
        f"Low {round(c.temp_min)}{temp_unit} | High {round(c.temp_max)}{temp_unit} | "
        f"Humidity {c.humidity}% | Pressure {c.pressure} hPa",
        f"Wind {c.wind_speed:.1f} {speed_unit} {wind_direction(c.wind_deg)}",
        f"Sunrise {format_local_time(c.sunrise, c.utc_offset)} | "
        f"Sunset {format_local_time(c.sunset, c.utc_offset)}",
    ]

    if report.hourly:
        lines.append("")
        lines.append("Next 24 hours:")
        for i, h in enumerate(report.hourly):
            label = "Now" if i == 0 else format_local_time(h.timestamp, report.utc_offset)
            lines.append(
                f"  {label:>5} {condition_glyph(h.weather_code)} {round(h.temperature)}{temp_mark} "
                f"{round(h.precipitation_probability * 100)}%💧"
            )

    if report.daily:
        lines.append("")
        lines.append("Daily forecast:")
        for i, d in enumerate(report.daily):
            when = location_time(d.representative_timestamp, report.utc_offset)
            label = "Tomorrow" if i == 0 else when.strftime("%a")
            lines.append(
                f"  {label:<8} {when.strftime('%b %d')} {condition_glyph(d.weather_code)} "
                f"{round(d.temp_max)}{temp_mark} / {round(d.temp_min)}{temp_mark} | "
                f"{round(d.wind_speed)} {speed_unit} | {round(d.precipitation_probability * 100)}%"
            )
    elif not report.hourly:
        lines.append("")
        lines.append("Forecast unavailable")

    return "\n".join(lines)


def format_report_json(report: WeatherReport) -> str:
    """JSON report for programmatic consumption."""
    return json.dumps(asdict(report), indent=2, ensure_ascii=False)


def format_resolution_text(resolution: LocationResolution) -> str:
    approx = resolution.approximate
    where = f"~{approx.lat:.4f}, {approx.lng:.4f}"
    if resolution.display_name:
        return f"Approximate location: {resolution.display_name} ({where})"
    if resolution.error:
        return f"Unknown location ({where}): {resolution.error}"
    return f"Unknown location ({where})"


def format_coordinate_report_text(result: CoordinateReport, now_ts: int | None = None) -> str:
    lines = [format_resolution_text(result.resolution)]
    if result.report is not None:
        lines.append(format_report_text(result.report, now_ts=now_ts))
    else:
        lines.append(f"Weather unavailable: {result.error}")
    return "\n".join(lines)


def format_coordinate_report_json(result: CoordinateReport) -> str:
    return json.dumps(asdict(result), indent=2, ensure_ascii=False)
