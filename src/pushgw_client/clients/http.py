"""可插拔 HTTP 客户端。

`GatewayClient` 只依赖 `HttpClient` 协议；默认实现基于 `requests`，
测试中可替换为记录调用的假客户端。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

import requests  # type: ignore[import-untyped]

from ..errors import TransportError

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT_S = 10.0
TOTAL_TIMEOUT_S = 20.0


@dataclass
class RequestOptions:
    """单次请求的选项。

    属性:
        headers: 请求头。
        body: 请求体；None 表示不附带请求体。
        connect_timeout: 建立连接超时（秒）。
        timeout: 请求超时（秒）。
    """

    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    connect_timeout: float = CONNECT_TIMEOUT_S
    timeout: float = TOTAL_TIMEOUT_S


@dataclass
class HttpResponse:
    """HTTP 响应（仅保留状态码与文本响应体）。"""

    status_code: int
    text: str = ""


class HttpClient(Protocol):
    """发起 HTTP 请求的能力。"""

    def request(self, method: str, url: str, options: RequestOptions) -> HttpResponse:
        ...


class RequestsHttpClient:
    """基于 `requests.Session` 的默认 HTTP 客户端。

    参数:
        session: 预先配置好的 Session（代理、证书、连接池等）；缺省新建。

    副作用:
        网络请求；`requests.RequestException` 统一转换为 `TransportError`。
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.session = session if session is not None else requests.Session()

    def request(self, method: str, url: str, options: RequestOptions) -> HttpResponse:
        """发送请求并返回 `HttpResponse`。

        参数:
            method: HTTP 方法（如 "PUT"）。
            url: 完整目标 URL。
            options: 请求头、请求体与超时设置。

        返回值:
            HttpResponse: 状态码与响应体文本。

        副作用:
            网络请求；失败时抛出 `TransportError`，不重试。
        """

        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(
                method,
                url,
                headers=options.headers,
                data=options.body,
                timeout=(options.connect_timeout, options.timeout),
                allow_redirects=False,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        return HttpResponse(status_code=resp.status_code, text=resp.text)
