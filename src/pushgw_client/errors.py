"""Pushgateway 客户端异常定义。

所有异常均同步抛给直接调用方；本包不做重试、不吞异常。
"""

from __future__ import annotations


class PushGatewayError(Exception):
    """本包异常基类。"""


class InvalidConfiguration(PushGatewayError, ValueError):
    """构造参数非法（如 transport 不在允许集合内）。"""


class TransportError(PushGatewayError):
    """底层 HTTP 客户端的网络层失败（DNS、连接拒绝、超时、TLS 等）。

    默认客户端会以 `raise ... from exc` 方式保留原始 `requests` 异常。
    """


class UnexpectedResponse(PushGatewayError):
    """HTTP 交互完成但状态码不是 200/202。

    属性:
        status_code: 网关返回的状态码。
        body: 响应体文本。
        address: 目标网关地址（host:port）。
    """

    def __init__(self, status_code: int, body: str, address: str) -> None:
        self.status_code = status_code
        self.body = body
        self.address = address
        super().__init__(
            f"Unexpected status code {status_code} received from push gateway "
            f"{address}: {body}"
        )
