"""文本暴露格式（text exposition format）渲染。

编码本身由 `prometheus_client` 完成，这里只固定 MIME 类型。
"""

from __future__ import annotations

from typing import Any

from prometheus_client import generate_latest  # type: ignore[import-not-found]

MIME_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def render(registry: Any) -> bytes:
    """将注册表渲染为文本格式。

    参数:
        registry: 任意提供 `collect()` 的对象，通常为 `CollectorRegistry`。

    返回值:
        bytes: UTF-8 编码的指标快照。
    """

    return generate_latest(registry)
