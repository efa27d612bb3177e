"""
weatherfx command line.

Usage:
    weatherfx dashboard [--city CITY] [--demo] [--fps N] [--variant scenic|lite]
    weatherfx render --condition rainy -o rain.gif
    weatherfx current London --forecast
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import WeatherFXConfig
from .effects.conditions import Condition, EffectVariant
from .logging_config import DEFAULT_LOG_FILE, configure_logging
from .utils.error_handling import log_filesystem_error
from .weather.client import WeatherError
from .weather.protocol import create_weather_source

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weatherfx",
        description="WeatherFX - weather dashboard with animated weather effects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    weatherfx dashboard                          # Run with defaults
    weatherfx dashboard --city Tokyo --demo      # Demo data, start in Tokyo
    weatherfx render --condition snowy --frames 90 -o snow.gif
    weatherfx current Paris --forecast

Environment:
    OPENWEATHER_API_KEY   API key for live data (demo data when unset)
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Log level (default: WEATHERFX_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command")

    dash = subparsers.add_parser("dashboard", help="Run the terminal dashboard")
    dash.add_argument("--city", "-c", type=str, help="City to show first")
    dash.add_argument("--demo", action="store_true", help="Use demo data")
    dash.add_argument("--fps", type=int, help="Frames per second (default: 30)")
    dash.add_argument("--variant", choices=[v.value for v in EffectVariant],
                      help="Effect rendition")

    render = subparsers.add_parser("render", help="Render an effect to an animated GIF/PNG")
    render.add_argument("--condition", required=True,
                        choices=[c.value for c in Condition], help="Weather condition")
    render.add_argument("--intensity", type=float, default=1.0, help="Particle multiplier (default: 1)")
    render.add_argument("--size", type=str, default="800x600", help="WIDTHxHEIGHT (default: 800x600)")
    render.add_argument("--frames", type=int, default=60, help="Number of frames (default: 60)")
    render.add_argument("--fps", type=int, default=30, help="Playback rate (default: 30)")
    render.add_argument("--variant", choices=[v.value for v in EffectVariant],
                        default=EffectVariant.SCENIC.value, help="Effect rendition")
    render.add_argument("--background", type=str, default="sky",
                        help="#RRGGBB, 'sky' for a condition backdrop, or 'none'")
    render.add_argument("--seed", type=int, help="Random seed for repeatable output")
    render.add_argument("--output", "-o", required=True, help="Output path (.gif or .png)")

    current = subparsers.add_parser("current", help="Print current conditions for a city")
    current.add_argument("city", type=str, help="City name")
    current.add_argument("--forecast", "-f", action="store_true", help="Also print the forecast")
    current.add_argument("--demo", action="store_true", help="Use demo data")

    return parser


def _cmd_dashboard(args, config: WeatherFXConfig) -> int:
    from .tui.dashboard import run_dashboard

    config.demo = config.demo or args.demo
    variant = EffectVariant.parse(args.variant) if args.variant else None
    run_dashboard(config=config, city=args.city, fps=args.fps, variant=variant)
    return 0


def _cmd_render(args, config: WeatherFXConfig) -> int:
    from .effects.recorder import SKY_BACKGROUNDS, parse_color, parse_size, record_frames, save_animation

    try:
        size = parse_size(args.size)
        if args.background.strip().lower() == "sky":
            background = SKY_BACKGROUNDS[Condition.parse(args.condition)]
        else:
            background = parse_color(args.background)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    frames = record_frames(args.condition, intensity=args.intensity, size=size,
                           frames=args.frames, variant=args.variant,
                           background=background, seed=args.seed)
    try:
        path = save_animation(frames, args.output, fps=args.fps)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        log_filesystem_error(e, "saving animation", path=args.output)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {len(frames)} frames to {path}")
    return 0


def _cmd_current(args, config: WeatherFXConfig) -> int:
    config.demo = config.demo or args.demo
    source = create_weather_source(config)
    try:
        current = source.get_current(args.city)
        forecast = source.get_forecast(current) if args.forecast else []
    except WeatherError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    suffix = " (demo data)" if source.is_demo_mode() else ""
    print(f"{current.city}, {current.country}{suffix}")
    print(f"  {current.temperature}°C, {current.description} ({current.condition.value})")
    print(f"  Feels like {current.feels_like}°C | Humidity {current.humidity}% | "
          f"Wind {current.wind_speed} km/h | Visibility {current.visibility} km")
    for day in forecast:
        print(f"  {day.day:<9} {day.high:>3}/{day.low:<3}°C  {day.condition.value:<7} "
              f"{day.precipitation:>3}%  {day.description}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the weatherfx command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = WeatherFXConfig.from_env()
    level = args.log_level or config.log_level

    command = args.command or "dashboard"
    if command == "dashboard":
        if args.command is None:
            args.city = args.fps = args.variant = None
            args.demo = False
        # curses owns the terminal, so the dashboard always logs to a file
        configure_logging(level, config.log_file or DEFAULT_LOG_FILE)
        return _cmd_dashboard(args, config)

    configure_logging(level, config.log_file)
    if command == "render":
        return _cmd_render(args, config)
    return _cmd_current(args, config)


if __name__ == "__main__":
    sys.exit(main())
