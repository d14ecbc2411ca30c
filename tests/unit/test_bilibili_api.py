"""Bilibili pagelist クライアントのテスト"""

import logging

import httpx
import pytest

from src.domain.entities import Part
from src.domain.exceptions import EmptyResultError, UpstreamError
from src.infrastructure.bilibili_api import BilibiliPageListClient

PAGELIST_OK = {
    "code": 0,
    "message": "0",
    "ttl": 1,
    "data": [
        {"cid": 111, "page": 1, "part": "第一回", "duration": 120, "vid": ""},
        {"cid": 222, "page": 2, "part": "第二回", "duration": 300, "vid": ""},
    ],
}


def make_client(handler) -> BilibiliPageListClient:
    return BilibiliPageListClient(
        base_url="https://api.example.test",
        timeout=5,
        user_agent="test-agent",
        transport=httpx.MockTransport(handler),
    )


class TestFetchParts:
    """fetch_parts のテスト"""

    def test_success(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=PAGELIST_OK)

        parts = make_client(handler).fetch_parts("BV1GJ411x7h7")

        assert parts == [
            Part(cid=111, page=1, title="第一回", duration=120),
            Part(cid=222, page=2, title="第二回", duration=300),
        ]
        request = seen[0]
        assert request.url.path == "/x/player/pagelist"
        assert request.url.params["bvid"] == "BV1GJ411x7h7"
        assert request.headers["User-Agent"] == "test-agent"
        assert request.headers["Referer"] == "https://www.bilibili.com/video/BV1GJ411x7h7"

    def test_transport_error(self) -> None:
        """接続失敗は 503"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(UpstreamError) as exc_info:
            make_client(handler).fetch_parts("BV1GJ411x7h7")
        assert exc_info.value.status_code == 503

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(UpstreamError) as exc_info:
            make_client(handler).fetch_parts("BV1GJ411x7h7")
        assert exc_info.value.status_code == 503

    def test_non_200(self) -> None:
        """非200応答は 502"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(412, text="precondition failed")

        with pytest.raises(UpstreamError, match="412") as exc_info:
            make_client(handler).fetch_parts("BV1GJ411x7h7")
        assert exc_info.value.status_code == 502

    def test_invalid_json(self) -> None:
        """JSON不正は 500"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        with pytest.raises(UpstreamError) as exc_info:
            make_client(handler).fetch_parts("BV1GJ411x7h7")
        assert exc_info.value.status_code == 500

    def test_api_error_code(self) -> None:
        """code != 0 は 502、メッセージとコードを含む"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"code": -404, "message": "啥都木有", "data": None})

        with pytest.raises(UpstreamError, match=r"啥都木有 \(Code: -404\)") as exc_info:
            make_client(handler).fetch_parts("BV1GJ411x7h7")
        assert exc_info.value.status_code == 502

    def test_empty_data(self) -> None:
        """0件は EmptyResultError (404)"""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"code": 0, "message": "0", "data": []})

        with pytest.raises(EmptyResultError) as exc_info:
            make_client(handler).fetch_parts("BV1GJ411x7h7")
        assert exc_info.value.status_code == 404

    def test_malformed_item(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"code": 0, "data": [{"cid": "x", "duration": 1}]})

        with pytest.raises(UpstreamError) as exc_info:
            make_client(handler).fetch_parts("BV1GJ411x7h7")
        assert exc_info.value.status_code == 500

    def test_logs_response_status(self, caplog: pytest.LogCaptureFixture) -> None:
        """応答受信ログにステータスコードを含める"""
        caplog.set_level(logging.INFO, logger="src.infrastructure.bilibili_api")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=PAGELIST_OK)

        make_client(handler).fetch_parts("BV1GJ411x7h7")

        received = [r.getMessage() for r in caplog.records if "応答受信" in r.getMessage()]
        assert received == ["[Bilibili] 応答受信 | bvid='BV1GJ411x7h7' | status=200"]
