"""
Tests for the client-side distance service.

The backend proxy is either an ``httpx.MockTransport`` or, for the
end-to-end cases, the real app mounted through ``ASGITransport`` with a
mocked Google provider behind it.
"""

import json

import httpx
import pytest
from httpx import ASGITransport

from src.domain.distance import ROAD_DETOUR_FACTOR, haversine_km
from src.domain.entities import Coordinate, PricingTier
from src.domain.errors import CoordinateParseError, DistanceCalculationError
from src.infrastructure.api_client import ApiClient
from src.services.distance_service import DistanceService

BASE_URL = "http://backend.test/api/v1"


def _service(handler) -> DistanceService:
    return DistanceService(ApiClient(BASE_URL, transport=httpx.MockTransport(handler)))


def _unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def _expected_estimate(origin: Coordinate, destination: Coordinate) -> float:
    return haversine_km(origin.lat, origin.lng, destination.lat, destination.lng) * ROAD_DETOUR_FACTOR


# ── Primary path ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_uses_proxy_result(lome_origin, lome_destination):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": {"distance": 5.23, "distance_text": "5.2 km", "duration": "13 mins"},
            },
        )

    result = await _service(handler).calculate_distance(lome_origin, lome_destination)

    assert result.distance_km == 5.23
    assert result.duration_text == "13 mins"
    assert result.distance_text == "5.2 km"
    assert result.is_estimated is False

    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/api/v1/distance-matrix"
    assert json.loads(seen[0].content) == {
        "origin": {"lat": 6.1319, "lng": 1.2228},
        "destination": {"lat": 6.1725, "lng": 1.2314},
    }


@pytest.mark.asyncio
async def test_proxy_result_defaults(lome_origin, lome_destination):
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": {"distance": 5.234}})

    result = await _service(handler).calculate_distance(lome_origin, lome_destination)
    assert result.duration_text == "Unknown"
    assert result.distance_text == "5.2 km"


# ── Fallback ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "handler",
    [
        _unreachable,
        lambda request: httpx.Response(500, json={"success": False, "error": "GOOGLE_MAPS_API_ERROR"}),
        lambda request: httpx.Response(200, json={"success": False}),
        lambda request: httpx.Response(200, json={"success": True, "data": {}}),
        lambda request: httpx.Response(200, text="<html>gateway</html>"),
        lambda request: httpx.Response(401),
        lambda request: httpx.Response(200, json={"success": True, "data": {"distance": -3}}),
        lambda request: httpx.Response(200, json={"success": True, "data": {"distance": "NaN"}}),
        lambda request: httpx.Response(200, json={"success": True, "data": {"distance": "inf"}}),
    ],
    ids=[
        "unreachable", "http-500", "unsuccessful", "no-distance", "not-json", "unauthorized",
        "negative-distance", "nan-distance", "infinite-distance",
    ],
)
async def test_falls_back_to_estimate(handler, lome_origin, lome_destination):
    result = await _service(handler).calculate_distance(lome_origin, lome_destination)

    assert result.is_estimated is True
    assert result.duration_text == "Estimated"
    assert result.distance_km == pytest.approx(_expected_estimate(lome_origin, lome_destination))
    assert result.distance_text == f"~{result.distance_km:.1f} km (estimated)"


@pytest.mark.asyncio
async def test_single_attempt_before_fallback(lome_origin, lome_destination):
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    await _service(handler).calculate_distance(lome_origin, lome_destination)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_lome_scenario_with_proxy_down(lome_origin, lome_destination):
    result = await _service(_unreachable).calculate_distance(lome_origin, lome_destination)

    assert result.is_estimated is True
    assert result.duration_text == "Estimated"
    # 4.61 km as the crow flies, stretched by 1.3
    assert 5.9 < result.distance_km < 6.1


@pytest.mark.asyncio
async def test_missing_endpoint_raises(lome_origin):
    with pytest.raises(ValueError, match="required"):
        await _service(_unreachable).calculate_distance(lome_origin, None)


@pytest.mark.asyncio
async def test_uncomputable_fallback_raises(monkeypatch, lome_origin, lome_destination):
    def broken(origin, destination):
        raise ValueError("Cannot estimate a distance between these coordinates")

    monkeypatch.setattr("src.services.distance_service.estimate_road_distance", broken)
    with pytest.raises(DistanceCalculationError):
        await _service(_unreachable).calculate_distance(lome_origin, lome_destination)


# ── From location strings ─────────────────────────────────────────────


@pytest.mark.asyncio
async def test_from_urls_parses_both_inputs():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"success": True, "data": {"distance": 3.1}})

    result = await _service(handler).calculate_distance_from_urls(
        "6°11'37.0\"N 1°11'02.5\"E", "https://www.google.com/maps/@6.1725,1.2314,15z"
    )

    assert result.distance_km == 3.1
    origin = bodies[0]["origin"]
    assert origin["lat"] == pytest.approx(6.193611, abs=1e-6)
    assert origin["lng"] == pytest.approx(1.184028, abs=1e-6)
    assert bodies[0]["destination"] == {"lat": 6.1725, "lng": 1.2314}


@pytest.mark.asyncio
async def test_from_urls_unparseable_pickup():
    with pytest.raises(CoordinateParseError) as excinfo:
        await _service(_unreachable).calculate_distance_from_urls("somewhere", "6.17, 1.23")

    message = str(excinfo.value)
    assert "pickup" in message
    assert "q=" in message and "@" in message
    assert "DMS" in message and "Decimal" in message


@pytest.mark.asyncio
async def test_from_urls_unparseable_dropoff():
    with pytest.raises(CoordinateParseError, match="dropoff"):
        await _service(_unreachable).calculate_distance_from_urls("6.17, 1.23", "")


@pytest.mark.asyncio
async def test_from_urls_out_of_range_rejected():
    with pytest.raises(CoordinateParseError, match="out of range"):
        await _service(_unreachable).calculate_distance_from_urls("6.17, 1.23", "95.0, 1.23")


# ── End to end through the real endpoint ──────────────────────────────


@pytest.mark.asyncio
async def test_end_to_end_through_app(app_factory, lome_origin, lome_destination):
    service = DistanceService(ApiClient(BASE_URL, transport=ASGITransport(app=app_factory())))

    result = await service.calculate_distance(lome_origin, lome_destination)

    assert result.is_estimated is False
    assert result.distance_km == 5.23
    assert result.duration_text == "13 mins"


@pytest.mark.asyncio
async def test_end_to_end_provider_refusal_falls_back(app_factory, lome_origin, lome_destination):
    app = app_factory(
        lambda request: httpx.Response(200, json={"status": "REQUEST_DENIED", "error_message": "bad key"})
    )
    service = DistanceService(ApiClient(BASE_URL, transport=ASGITransport(app=app)))

    result = await service.calculate_distance(lome_origin, lome_destination)

    assert result.is_estimated is True
    assert result.distance_km == pytest.approx(_expected_estimate(lome_origin, lome_destination))


# ── Pricing & diagnostics ─────────────────────────────────────────────


def test_delivery_price_delegates():
    service = _service(_unreachable)
    assert service.calculate_delivery_price(6.2) == 700
    assert service.calculate_delivery_price(2.0, PricingTier(range_1_5km=450)) == 450


def test_check_coordinate_parsing():
    report = DistanceService.check_coordinate_parsing("6.19, 1.18")
    assert report == {"input": "6.19, 1.18", "result": Coordinate(6.19, 1.18), "is_valid": True}
    assert DistanceService.check_coordinate_parsing("nowhere")["is_valid"] is False


@pytest.mark.asyncio
async def test_check_distance_calculation():
    service = _service(_unreachable)

    ok = await service.check_distance_calculation("6.1319, 1.2228", "6.1725, 1.2314")
    assert ok["success"] is True
    assert ok["result"].is_estimated is True

    failed = await service.check_distance_calculation("nowhere", "6.1725, 1.2314")
    assert failed["success"] is False
    assert "Supported formats" in failed["error"]
