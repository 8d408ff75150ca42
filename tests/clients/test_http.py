"""默认 HTTP 客户端测试。"""

from __future__ import annotations

from typing import Any, Dict

import pytest
import requests

from pushgw_client.clients.http import HttpResponse, RequestOptions, RequestsHttpClient
from pushgw_client.errors import TransportError


def test_request_passes_headers_body_and_timeouts(requests_mock):
    """请求头、请求体与 (connect, read) 超时应透传给 requests。"""

    url = "http://gw:9091/metrics/job/j"
    requests_mock.put(url, status_code=200, text="ok")
    client = RequestsHttpClient()
    resp = client.request(
        "PUT",
        url,
        RequestOptions(
            headers={"Content-Type": "text/plain"},
            body=b"m 1.0\n",
            connect_timeout=10.0,
            timeout=20.0,
        ),
    )
    assert resp == HttpResponse(status_code=200, text="ok")
    req = requests_mock.request_history[0]
    assert req.headers["Content-Type"] == "text/plain"
    assert req.body == b"m 1.0\n"
    assert req.timeout == (10.0, 20.0)


def test_non_2xx_is_returned_not_raised(requests_mock):
    """状态码判断由调用方负责，客户端只返回响应。"""

    url = "http://gw:9091/metrics/job/j"
    requests_mock.post(url, status_code=500, text="boom")
    resp = RequestsHttpClient().request("POST", url, RequestOptions())
    assert resp.status_code == 500 and resp.text == "boom"


@pytest.mark.parametrize(
    "exc",
    [
        requests.exceptions.ConnectionError,
        requests.exceptions.ConnectTimeout,
        requests.exceptions.ReadTimeout,
        requests.exceptions.SSLError,
    ],
)
def test_requests_errors_become_transport_error(requests_mock, exc):
    url = "https://gw:9091/metrics/job/j"
    requests_mock.put(url, exc=exc)
    with pytest.raises(TransportError) as ei:
        RequestsHttpClient().request("PUT", url, RequestOptions())
    assert isinstance(ei.value.__cause__, exc)
    assert requests_mock.call_count == 1


def test_uses_given_session(monkeypatch: pytest.MonkeyPatch):
    """传入的 Session 应被复用。"""

    captured: Dict[str, Any] = {}

    class DummyResp:
        status_code = 202
        text = ""

    session = requests.Session()

    def fake_request(method: str, url: str, **kwargs: Any) -> DummyResp:
        captured.update(kwargs, method=method, url=url)
        return DummyResp()

    monkeypatch.setattr(session, "request", fake_request)
    resp = RequestsHttpClient(session).request("DELETE", "http://x/y", RequestOptions())
    assert resp.status_code == 202
    assert captured["method"] == "DELETE" and captured["data"] is None
    assert captured["allow_redirects"] is False


def test_request_options_defaults_match_gateway_timeouts():
    from pushgw_client.gateway import CONNECT_TIMEOUT_S, TOTAL_TIMEOUT_S

    opts = RequestOptions()
    assert (opts.connect_timeout, opts.timeout) == (CONNECT_TIMEOUT_S, TOTAL_TIMEOUT_S)
