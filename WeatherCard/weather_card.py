"""Weather card state: active city, latest snapshot and time-of-day bucket."""
import asyncio
import logging
import time
from datetime import date
from typing import Callable, List, Optional, Set
from weather_provider import (
    LocationLookupFailed,
    LocationProviderBase,
    WeatherProviderBase,
    WeatherProviderError,
)
from weather_data import TimeOfDay, WeatherSnapshot
from time_of_day import classify_snapshot
from layout import CardView, build_card_view

DEFAULT_CITY = "Pune"


class WeatherCard:
    """
    Drives a single weather card.

    Writing the active city enqueues exactly one fetch for the written value.
    Fetches are never cancelled, so when several are in flight the one that
    completes last decides what is shown. Pass ``discard_stale_responses=True``
    to drop responses older than the newest one already applied instead.

    All methods that start work must be called from a running event loop.
    Provider calls block, so they run in worker threads via ``asyncio.to_thread``.
    """

    def __init__(
        self,
        weather_provider: WeatherProviderBase,
        location_provider: Optional[LocationProviderBase] = None,
        default_city: str = DEFAULT_CITY,
        clock: Callable[[], float] = time.time,
        discard_stale_responses: bool = False
    ):
        """
        Initialize the card.

        Args:
            weather_provider: Provider used for every weather fetch
            location_provider: Geolocation used once at start (None to skip)
            default_city: City shown until geolocation or a search replaces it
            clock: Returns the current UNIX time; read once per applied snapshot
            discard_stale_responses: Apply responses in request order only
        """
        if not default_city or not default_city.strip():
            raise ValueError("default_city must be a non-empty city name")

        self.weather_provider = weather_provider
        self.location_provider = location_provider
        self.clock = clock
        self.discard_stale_responses = discard_stale_responses

        self._city = default_city.strip()
        self._snapshot: Optional[WeatherSnapshot] = None
        self._time_of_day: Optional[TimeOfDay] = None
        self._draft = ""

        self._started = False
        self._tasks: Set[asyncio.Task] = set()
        self._listeners: List[Callable[["WeatherCard"], None]] = []
        self._last_issued = 0
        self._last_applied = 0
        self.fetch_count = 0

    @property
    def city(self) -> str:
        return self._city

    @property
    def snapshot(self) -> Optional[WeatherSnapshot]:
        return self._snapshot

    @property
    def time_of_day(self) -> Optional[TimeOfDay]:
        return self._time_of_day

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def pending(self) -> int:
        """Number of fetch/lookup tasks still running."""
        return len(self._tasks)

    def add_listener(self, callback: Callable[["WeatherCard"], None]) -> None:
        """Register a callback invoked after each applied snapshot."""
        self._listeners.append(callback)

    def start(self) -> None:
        """Fetch the default city and look up the caller's city, concurrently."""
        if self._started:
            logging.debug("Weather card already started")
            return
        self._started = True
        logging.info(f"Starting weather card with default city {self._city}")
        self._enqueue_fetch(self._city)
        if self.location_provider is not None:
            self._spawn(self._resolve_location())

    def set_city(self, city: str) -> None:
        """
        Make ``city`` the active city and fetch its weather.

        Every call issues a fetch, including one for the city already active.

        Raises:
            ValueError: If the city name is blank
        """
        if not city or not city.strip():
            raise ValueError("City name must not be empty")
        self._city = city.strip()
        logging.info(f"Active city set to {self._city}")
        self._enqueue_fetch(self._city)

    def type_search(self, text: str) -> None:
        self._draft = text

    def submit_search(self) -> bool:
        """
        Submit the search box.

        Returns:
            True if a search was issued, False if the draft was blank
        """
        city = self._draft.strip()
        if not city:
            return False
        self._draft = ""
        self.set_city(city)
        return True

    async def wait_idle(self) -> None:
        """Wait until no fetch or lookup is in flight, including ones started meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def view(self, today: Optional[date] = None) -> Optional[CardView]:
        """Current display values, or None while nothing has loaded yet."""
        if self._snapshot is None or self._time_of_day is None:
            return None
        return build_card_view(self._snapshot, self._time_of_day, today)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _enqueue_fetch(self, city: str) -> None:
        self.fetch_count += 1
        self._last_issued += 1
        self._spawn(self._fetch(city, self._last_issued))

    async def _fetch(self, city: str, request_id: int) -> None:
        logging.debug(f"Weather fetch #{request_id} for {city}")
        try:
            snapshot = await asyncio.to_thread(self.weather_provider.get_current, city)
        except WeatherProviderError as e:
            # Previous snapshot (or the loading state) stays on screen
            logging.error(f"Error fetching weather data for {city}: {e}")
            return
        except Exception:
            logging.exception(f"Unexpected error fetching weather data for {city}")
            return

        if self.discard_stale_responses and request_id < self._last_applied:
            logging.info(
                f"Discarding weather for {city} (request #{request_id} older than #{self._last_applied})"
            )
            return

        self._last_applied = max(self._last_applied, request_id)
        self._snapshot = snapshot
        self._time_of_day = classify_snapshot(snapshot, self.clock())
        logging.info(
            f"Weather for {snapshot.city}: {snapshot.temp}°C, {snapshot.condition_main}, "
            f"time of day {self._time_of_day.value}"
        )
        for callback in self._listeners:
            callback(self)

    async def _resolve_location(self) -> None:
        try:
            city = await asyncio.to_thread(self.location_provider.get_city)
        except LocationLookupFailed as e:
            logging.warning(f"Failed to fetch user's location, defaulting to {self._city}: {e}")
            return
        except Exception:
            logging.exception(f"Unexpected error looking up location, keeping {self._city}")
            return

        if not city:
            logging.warning(f"Location lookup returned no city, keeping {self._city}")
            return
        self.set_city(city)
