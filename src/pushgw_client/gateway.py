"""Pushgateway 客户端。

将注册表渲染为文本格式，并按 job 与 grouping key 拼出的 URL 发起
PUT（push）、POST（push_add）或删除请求（delete）。

URL 约定:
    `{transport}://{address}/metrics/job/{job}[/{label}/{value}]*`

    job、label、value 均原样拼接，不做 URL 编码；调用方须自行保证其为
    路径安全的字符串，含 `/` 的值会破坏 URL。

状态码约定:
    仅 200 与 202 视为成功；其余状态码（包括 204）一律抛出
    `UnexpectedResponse`。
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Union

import requests  # type: ignore[import-untyped]

from .clients.http import (
    CONNECT_TIMEOUT_S,
    TOTAL_TIMEOUT_S,
    HttpClient,
    RequestOptions,
    RequestsHttpClient,
)
from .errors import InvalidConfiguration, UnexpectedResponse
from .metrics.exposition import MIME_TYPE, render

ALLOWED_TRANSPORTS = ("http", "https")
ALLOWED_DELETE_METHODS = ("POST", "DELETE")
SUCCESS_STATUS_CODES = (200, 202)


class HttpMethod(Enum):
    """网关请求可用的 HTTP 方法。"""

    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


def build_url(
    transport: str,
    address: str,
    job: str,
    grouping_key: Optional[Mapping[str, str]] = None,
) -> str:
    """拼接网关目标 URL。

    参数:
        transport: `http` 或 `https`。
        address: 网关 `host:port`。
        job: Job 名称。
        grouping_key: 有序标签映射，按迭代顺序追加为 `/{label}/{value}`。

    返回值:
        str: 完整 URL；grouping key 为空时即
            `{transport}://{address}/metrics/job/{job}`。

    副作用:
        无。
    """

    url = f"{transport}://{address}/metrics/job/{job}"
    for label, value in (grouping_key or {}).items():
        url += f"/{label}/{value}"
    return url


def _default_http_client(
    http_client: Union[HttpClient, requests.Session, None],
) -> HttpClient:
    if http_client is None:
        return RequestsHttpClient()
    if isinstance(http_client, requests.Session):
        return RequestsHttpClient(session=http_client)
    return http_client


def _check_delete_method(delete_method: Union[HttpMethod, str]) -> HttpMethod:
    value = delete_method.value if isinstance(delete_method, HttpMethod) else delete_method
    if value not in ALLOWED_DELETE_METHODS:
        raise InvalidConfiguration(f'Invalid delete method "{value}"')
    return HttpMethod(value)


class GatewayClient:
    """Pushgateway 客户端。

    参数:
        address: 网关 `host:port`，不做格式校验。
        http_client: 共享的 HTTP 客户端（或 `requests.Session`）；缺省新建
            `RequestsHttpClient`。本类不负责关闭它。
        transport: `http` 或 `https`。
        delete_method: `delete()` 使用的 HTTP 方法，默认 POST；
            对接标准 Pushgateway 时可传 `HttpMethod.DELETE`。

    副作用:
        无；网络请求仅在调用 push/push_add/delete 时发生。

    异常:
        InvalidConfiguration: transport 不在允许集合内，或 delete_method 不是 POST/DELETE。
    """

    def __init__(
        self,
        address: str,
        http_client: Union[HttpClient, requests.Session, None] = None,
        transport: str = "http",
        *,
        delete_method: HttpMethod = HttpMethod.POST,
    ) -> None:
        if transport not in ALLOWED_TRANSPORTS:
            raise InvalidConfiguration(f'Invalid transport "{transport}"')
        self._address = address
        self._transport = transport
        self._http_client = _default_http_client(http_client)
        self._delete_method = _check_delete_method(delete_method)

    @property
    def address(self) -> str:
        return self._address

    @property
    def transport(self) -> str:
        return self._transport

    @property
    def http_client(self) -> HttpClient:
        return self._http_client

    @property
    def delete_method(self) -> HttpMethod:
        return self._delete_method

    def url_for(self, job: str, grouping_key: Optional[Mapping[str, str]] = None) -> str:
        """返回 job/grouping key 对应的目标 URL。"""

        return build_url(self._transport, self._address, job, grouping_key)

    def push(
        self,
        registry: Any,
        job: str,
        grouping_key: Optional[Mapping[str, str]] = None,
    ) -> None:
        """推送注册表中的全部指标，替换该 job（+ grouping key）下的整组指标。

        使用 HTTP PUT。
        """

        self._do_request(registry, job, HttpMethod.PUT, grouping_key)

    def push_add(
        self,
        registry: Any,
        job: str,
        grouping_key: Optional[Mapping[str, str]] = None,
    ) -> None:
        """推送注册表中的指标，仅替换同名、同 job 的已有指标。

        使用 HTTP POST。
        """

        self._do_request(registry, job, HttpMethod.POST, grouping_key)

    def delete(self, job: str, grouping_key: Optional[Mapping[str, str]] = None) -> None:
        """删除网关上该 job（+ grouping key）的指标。

        使用 `delete_method`（默认 HTTP POST），不附带请求体。
        """

        self._do_request(None, job, self._delete_method, grouping_key)

    def _do_request(
        self,
        registry: Any,
        job: str,
        method: HttpMethod,
        grouping_key: Optional[Mapping[str, str]],
    ) -> None:
        """构造并发送一次网关请求，检查状态码。

        参数:
            registry: 待渲染的注册表；为 None 时不附带请求体。
            job: Job 名称。
            method: HTTP 方法。
            grouping_key: 有序标签映射。

        返回值:
            None。

        副作用:
            单次网络请求；HTTP 客户端抛出的异常原样上抛，不重试。

        异常:
            UnexpectedResponse: 状态码不是 200/202。
        """

        url = self.url_for(job, grouping_key)
        options = RequestOptions(
            headers={"Content-Type": MIME_TYPE},
            connect_timeout=CONNECT_TIMEOUT_S,
            timeout=TOTAL_TIMEOUT_S,
        )
        if registry is not None:
            options.body = render(registry)
        resp = self._http_client.request(method.value, url, options)
        if resp.status_code not in SUCCESS_STATUS_CODES:
            raise UnexpectedResponse(resp.status_code, resp.text, self._address)


def push_to_gateway(
    address: str,
    job: str,
    registry: Any,
    grouping_key: Optional[Mapping[str, str]] = None,
    *,
    transport: str = "http",
    http_client: Union[HttpClient, requests.Session, None] = None,
) -> None:
    """一次性 push（PUT），等价于 `GatewayClient(...).push(...)`。"""

    GatewayClient(address, http_client, transport).push(registry, job, grouping_key)


def pushadd_to_gateway(
    address: str,
    job: str,
    registry: Any,
    grouping_key: Optional[Mapping[str, str]] = None,
    *,
    transport: str = "http",
    http_client: Union[HttpClient, requests.Session, None] = None,
) -> None:
    """一次性 push_add（POST）。"""

    GatewayClient(address, http_client, transport).push_add(registry, job, grouping_key)


def delete_from_gateway(
    address: str,
    job: str,
    grouping_key: Optional[Mapping[str, str]] = None,
    *,
    transport: str = "http",
    http_client: Union[HttpClient, requests.Session, None] = None,
    delete_method: HttpMethod = HttpMethod.POST,
) -> None:
    """一次性 delete。"""

    GatewayClient(
        address, http_client, transport, delete_method=delete_method
    ).delete(job, grouping_key)
