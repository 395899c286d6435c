"""Shared test fixtures: settings, a controllable clock, and scripted transports."""

import asyncio
from collections.abc import Iterable

import pytest

from geotag_api.core.config import Settings
from geotag_api.lib.geocoder import CacheStore, RateLimiter, RawProviderResponse
from geotag_api.services.reverse_geocoding_service import ReverseGeocoder


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedTransport:
    """Transport that replays queued outcomes and records dispatch times.

    Each outcome is a raw response, None (no result), or an exception to raise.
    When the script runs out, the last outcome repeats.
    """

    def __init__(
        self,
        name: str,
        outcomes: Iterable[RawProviderResponse | BaseException | None],
        clock: FakeClock | None = None,
    ) -> None:
        self._name = name
        self._outcomes = list(outcomes)
        self._clock = clock
        self.calls: list[tuple[float, float]] = []
        self.dispatch_times: list[float] = []

    @property
    def name(self) -> str:
        return self._name

    async def fetch(self, latitude: float, longitude: float) -> RawProviderResponse | None:
        self.calls.append((latitude, longitude))
        if self._clock is not None:
            self.dispatch_times.append(self._clock())
        # Yield like a real network call so concurrent resolves interleave.
        await asyncio.sleep(0)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,
        geocoder_user_agent="geotag-api-tests/1.0",
        geocoder_min_interval=1.0,
        geocoder_throttle_cooldown=5.0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scripted(clock: FakeClock):
    """Factory for ScriptedTransport instances stamped with the fake clock."""

    def _make(name: str, *outcomes: RawProviderResponse | BaseException | None) -> ScriptedTransport:
        return ScriptedTransport(name, outcomes, clock)

    return _make


@pytest.fixture
def make_geocoder(clock: FakeClock):
    """Factory for a ReverseGeocoder wired to scripted transports and the fake clock."""

    def _make(primary: ScriptedTransport, fallback: ScriptedTransport, cooldown: float = 5.0) -> ReverseGeocoder:
        return ReverseGeocoder(
            primary=primary,
            fallback=fallback,
            cache=CacheStore(),
            limiter=RateLimiter(min_interval=1.0, clock=clock, sleep=clock.sleep),
            throttle_cooldown=cooldown,
            sleep=clock.sleep,
        )

    return _make
