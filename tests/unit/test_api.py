"""JSON API のテスト"""

import pytest
from fastapi.testclient import TestClient

from app.api import create_app
from config.settings import Settings
from src.domain.entities import Part
from src.domain.exceptions import EmptyResultError, UpstreamError


class StubFetcher:
    def __init__(self, result: list[Part] | Exception) -> None:
        self.result = result
        self.calls: list[str] = []

    def fetch_parts(self, bvid: str) -> list[Part]:
        self.calls.append(bvid)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


PARTS = [
    Part(cid=1, page=1, title="a", duration=120),
    Part(cid=2, page=2, title="b", duration=300),
    Part(cid=3, page=3, title="c", duration=180),
]


def make_client(fetcher: StubFetcher, origins: str = "http://localhost:2233") -> TestClient:
    settings = Settings(_env_file=None, ALLOWED_ORIGINS=origins)
    return TestClient(create_app(settings, fetcher=fetcher))


class TestBilibiliParts:
    """GET /bilibili-parts のテスト"""

    def test_success(self) -> None:
        fetcher = StubFetcher(PARTS)
        response = make_client(fetcher).get(
            "/bilibili-parts",
            params={"url": "https://www.bilibili.com/video/BV1GJ411x7h7/?p=2"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["parts"][0] == {"cid": 1, "page": 1, "title": "a", "duration": 120}
        assert len(body["parts"]) == 3
        assert fetcher.calls == ["BV1GJ411x7h7"]

    def test_missing_url(self) -> None:
        response = make_client(StubFetcher(PARTS)).get("/bilibili-parts")
        assert response.status_code == 400
        assert "error" in response.json()

    def test_invalid_identifier(self) -> None:
        """BV号がなければ上流を呼ばずに 400"""
        fetcher = StubFetcher(PARTS)
        response = make_client(fetcher).get("/bilibili-parts", params={"url": "hello"})
        assert response.status_code == 400
        assert fetcher.calls == []

    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (UpstreamError("down", status_code=503), 503),
            (UpstreamError("bad", status_code=502), 502),
            (EmptyResultError(), 404),
        ],
    )
    def test_upstream_errors(self, error: UpstreamError, status: int) -> None:
        response = make_client(StubFetcher(error)).get(
            "/bilibili-parts", params={"url": "BV1GJ411x7h7"}
        )
        assert response.status_code == status
        assert response.json() == {"error": str(error)}

    def test_cors_allowed_origin(self) -> None:
        response = make_client(StubFetcher(PARTS)).get(
            "/bilibili-parts",
            params={"url": "BV1GJ411x7h7"},
            headers={"Origin": "http://localhost:2233"},
        )
        assert response.headers["access-control-allow-origin"] == "http://localhost:2233"

    def test_cors_other_origin(self) -> None:
        response = make_client(StubFetcher(PARTS)).get(
            "/bilibili-parts",
            params={"url": "BV1GJ411x7h7"},
            headers={"Origin": "http://evil.test"},
        )
        assert "access-control-allow-origin" not in response.headers


class TestDurations:
    """GET /api/durations のテスト"""

    def test_all_parts_double_speed(self) -> None:
        response = make_client(StubFetcher(PARTS)).get(
            "/api/durations", params={"url": "BV1GJ411x7h7", "speed": "2"}
        )
        assert response.status_code == 200
        body = response.json()
        assert (body["from"], body["to"]) == (1, 3)
        assert body["total_duration"] == 600
        assert body["adjusted_total_duration"] == 300
        assert body["total_formatted"] == "10:00"
        assert body["adjusted_formatted"] == "05:00"

    def test_range_is_committed(self) -> None:
        """範囲外の値はクランプされる"""
        response = make_client(StubFetcher(PARTS)).get(
            "/api/durations",
            params={"url": "BV1GJ411x7h7", "from": "2", "to": "0", "speed": "0"},
        )
        body = response.json()
        assert (body["from"], body["to"]) == (2, 2)
        assert body["speed"] == 1.0
        assert body["total_duration"] == 300
