"""Terminal host for the weather card."""
import argparse
import asyncio
import logging
import os
import sys
import threading

from dotenv import load_dotenv

from card_canvas import CardCanvas, PILCanvas
from layout import CARD_HEIGHT, CARD_WIDTH, render_card, render_loading, render_text
from location_provider import IpApiLocationProvider
from openweather_provider import OpenWeatherProvider
from weather_card import DEFAULT_CITY, WeatherCard

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "weather-card.log")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather card")
    parser.add_argument("--city", default=DEFAULT_CITY, help="City shown until geolocation or a search")
    parser.add_argument("--no-geolocate", action="store_true", help="Skip the IP geolocation lookup")
    parser.add_argument("--assets-dir", default=os.path.join(BASE_DIR, "public"),
                        help="Directory containing backgrounds/{morning,afternoon,evening,night}.jpeg")
    parser.add_argument("--output", help="Write the rendered card to this PNG after every update")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--discard-stale", action="store_true",
                        help="Ignore weather responses older than the latest one shown")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def load_config() -> str:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")
    logging.info("Configuration loaded")
    return api_key


def build_card(api_key: str, args: argparse.Namespace) -> WeatherCard:
    weather_provider = OpenWeatherProvider(api_key=api_key, units="metric", timeout=args.timeout)
    location_provider = None if args.no_geolocate else IpApiLocationProvider(timeout=args.timeout)
    card = WeatherCard(
        weather_provider=weather_provider,
        location_provider=location_provider,
        default_city=args.city,
        discard_stale_responses=args.discard_stale,
    )
    logging.info("Weather card ready (default city=%s, geolocate=%s)", args.city, not args.no_geolocate)
    return card


def show(card: WeatherCard, canvas: CardCanvas, output) -> None:
    view = card.view()
    if view is None:
        render_loading(canvas)
        print("Loading...", flush=True)
    else:
        render_card(canvas, view)
        print(render_text(view), flush=True)
        print(flush=True)
    if output:
        canvas.save(output)


def _read_stdin(loop: asyncio.AbstractEventLoop, lines: asyncio.Queue) -> None:
    for line in sys.stdin:
        if loop.is_closed():
            return
        loop.call_soon_threadsafe(lines.put_nowait, line)
    if not loop.is_closed():
        loop.call_soon_threadsafe(lines.put_nowait, "")


async def run(card: WeatherCard, canvas: CardCanvas, output=None) -> None:
    """Show the card, then treat every stdin line as a city search until EOF."""
    card.add_listener(lambda c: show(c, canvas, output))
    show(card, canvas, output)
    card.start()

    lines: asyncio.Queue = asyncio.Queue()
    reader = threading.Thread(
        target=_read_stdin, args=(asyncio.get_running_loop(), lines), daemon=True
    )
    reader.start()

    while True:
        line = await lines.get()
        if not line:
            break
        card.type_search(line)
        if not card.submit_search():
            logging.debug("Ignoring empty search")

    await card.wait_idle()


def main() -> None:
    args = parse_args()
    setup_logging(args.log_file, args.verbose)
    api_key = load_config()

    card = build_card(api_key, args)
    canvas = PILCanvas(CARD_WIDTH, CARD_HEIGHT, assets_dir=args.assets_dir)

    print("Type a city name and press Enter to search (Ctrl-D to quit).", flush=True)
    try:
        asyncio.run(run(card, canvas, args.output))
    except KeyboardInterrupt:
        logging.info("Stopping weather card")


if __name__ == "__main__":
    main()
