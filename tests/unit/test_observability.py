"""Tests for request-id log tagging and search metrics."""

import logging

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from propsearch.core.errors import UpstreamError
from propsearch.core.logging import RequestIdFilter, request_id_var
from propsearch.main import create_app
from propsearch.schemas import SearchParams
from propsearch.services.property_search_service import PropertySearchService


def _sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestRequestIdFilter:
    def test_stamps_active_request_id(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        token = request_id_var.set("req-42")
        try:
            RequestIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-42"

    def test_outside_request_is_none(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        RequestIdFilter().filter(record)

        assert record.request_id is None

    def test_search_logs_carry_request_id(self, make_provider, empty_result, cache, caplog):
        svc = PropertySearchService([make_provider("a", result=empty_result)], cache)
        client = TestClient(create_app(search_service=svc))
        # configure_logging() replaced root handlers; re-attach the capture handler
        logging.getLogger().addHandler(caplog.handler)
        caplog.handler.addFilter(RequestIdFilter())

        client.post("/v1/search-properties", json={"zipCode": "20895"},
                    headers={"X-Request-Id": "trace-7"})

        records = [r for r in caplog.records if r.name.endswith("property_search_service")]
        assert records
        assert all(r.request_id == "trace-7" for r in records)


class TestSearchMetrics:
    @pytest.mark.asyncio
    async def test_cache_lookups_counted(self, make_provider, empty_result, cache):
        svc = PropertySearchService([make_provider("a", result=empty_result)], cache)
        params = SearchParams(zipCode="10001")
        hits = _sample("property_cache_lookups_total", {"result": "hit"})
        misses = _sample("property_cache_lookups_total", {"result": "miss"})

        await svc.search_properties(params)
        await svc.search_properties(params)

        assert _sample("property_cache_lookups_total", {"result": "miss"}) == misses + 1
        assert _sample("property_cache_lookups_total", {"result": "hit"}) == hits + 1

    @pytest.mark.asyncio
    async def test_provider_outcomes_counted(self, make_provider, empty_result, cache):
        svc = PropertySearchService(
            [make_provider("metrics-a", error=UpstreamError("down")),
             make_provider("metrics-b", result=empty_result)],
            cache,
        )

        await svc.search_properties(SearchParams(zipCode="10001"))

        assert _sample("property_provider_requests_total",
                       {"provider": "metrics-a", "outcome": "failure"}) == 1
        assert _sample("property_provider_requests_total",
                       {"provider": "metrics-b", "outcome": "success"}) == 1
