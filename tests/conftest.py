"""Pytest configuration and shared fixtures for property search tests."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from propsearch.core.cache import PropertyCache
from propsearch.core.security import counter
from propsearch.data.base import PropertySearchResult
from propsearch.services.normalize import summarize_market


# ============================================================================
# Clock
# ============================================================================

class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return PropertyCache(ttl_seconds=3600, timer=clock)


# ============================================================================
# Providers
# ============================================================================

class StubProvider:
    """Listing provider that returns a fixed result or raises, counting calls."""

    def __init__(self, name: str, result: Optional[PropertySearchResult] = None,
                 error: Optional[Exception] = None, log: Optional[List[str]] = None):
        self.name = name
        self.result = result
        self.error = error
        self.calls = 0
        self.log = log if log is not None else []

    async def fetch(self, params):
        self.calls += 1
        self.log.append(self.name)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def make_provider():
    return StubProvider


@pytest.fixture
def empty_result():
    return PropertySearchResult(properties=[], market_summary=summarize_market([]))


# ============================================================================
# Upstream payloads
# ============================================================================

@pytest.fixture
def realtymole_payload() -> Dict[str, Any]:
    return {
        "listings": [
            {
                "id": "rm-1",
                "address": "1 Oak St",
                "city": "Kensington",
                "state": "MD",
                "zipcode": "20895",
                "price": 400000,
                "sqft": 2000,
                "bedrooms": 3,
                "bathrooms": 2,
                "property_type": "Townhouse",
                "days_on_market": 12,
                "photos": ["https://img.example/1.jpg"],
                "description": "Needs a kitchen.",
                "mls_id": "MD123",
                "year_built": 1962,
                "latitude": 39.03,
                "longitude": -77.07,
            },
            {
                "id": "rm-2",
                "address": "2 Elm St",
                "city": "Kensington",
                "state": "MD",
                "zipcode": "20895",
                "price": 600000,
                "sqft": 3000,
                "bedrooms": 4,
                "bathrooms": 3,
                "days_on_market": 30,
            },
        ]
    }


@pytest.fixture
def rentspree_payload() -> Dict[str, Any]:
    return {
        "listings": [
            {
                "id": 77,
                "full_address": "9 Pine Ave, Kensington, MD 20895",
                "rent": 2500,
                "square_feet": 1100,
                "bedrooms": 2,
                "bathrooms": 1,
                "days_on_market": 4,
            }
        ]
    }


def json_transport(payload: Any, status_code: int = 200,
                   seen: Optional[List[httpx.Request]] = None) -> httpx.MockTransport:
    """MockTransport answering every request with ``payload`` as JSON."""
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"),
                              headers={"Content-Type": "application/json"})
    return httpx.MockTransport(handler)


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    return json_transport


@pytest.fixture(autouse=True)
def reset_rate_limits():
    counter.reset()
    yield
    counter.reset()
