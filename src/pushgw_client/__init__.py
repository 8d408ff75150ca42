"""Pushgateway 客户端包。

将指标注册表渲染为文本格式并推送到 Prometheus Pushgateway，
供无法被抓取的短生命周期任务（批处理、cron）上报指标。
"""

from .errors import (
    InvalidConfiguration,
    PushGatewayError,
    TransportError,
    UnexpectedResponse,
)
from .gateway import (
    GatewayClient,
    HttpMethod,
    delete_from_gateway,
    push_to_gateway,
    pushadd_to_gateway,
)

__all__ = [
    "__version__",
    "get_version",
    "GatewayClient",
    "HttpMethod",
    "InvalidConfiguration",
    "PushGatewayError",
    "TransportError",
    "UnexpectedResponse",
    "delete_from_gateway",
    "push_to_gateway",
    "pushadd_to_gateway",
]

__version__ = "0.1.0"


def get_version() -> str:
    """返回当前包版本号。

    返回值:
        str: 版本号字符串，例如 "0.1.0"。
    副作用:
        无副作用，仅读取内置常量。
    """

    return __version__
