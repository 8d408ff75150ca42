"""指标注册表构建工具。

供 CLI 使用：将 `name=value` 形式的输入转换为 `CollectorRegistry`，
以及把 `label=value` 解析为有序的 grouping key。
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Tuple

from prometheus_client import (  # type: ignore[import-not-found]
    CollectorRegistry,
    Gauge,
)


def build_registry(metrics: Mapping[str, float]) -> CollectorRegistry:
    """构建 Prometheus `CollectorRegistry` 并写入指标。

    参数:
        metrics: 指标名到数值的映射，例如 {"batch_duration_seconds": 12.3}。

    返回值:
        CollectorRegistry: 已填充数据的注册表，可用于推送。

    副作用:
        无。
    """

    reg = CollectorRegistry()
    for name, val in metrics.items():
        g = Gauge(name, f"{name}", registry=reg)
        g.set(float(val))
    return reg


def _split_pair(item: str) -> Tuple[str, str]:
    key, sep, value = item.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"expected NAME=VALUE, got: {item!r}")
    return key, value.strip()


def parse_metric_pairs(items: Iterable[str]) -> Dict[str, float]:
    """解析 `name=value` 列表为指标映射。

    参数:
        items: 例如 ["jobs_processed=42", "duration_seconds=1.5"]。

    返回值:
        dict: 指标名到浮点值的映射（保持输入顺序）。

    副作用:
        无；格式错误或数值非法时抛出 ValueError。
    """

    out: Dict[str, float] = {}
    for item in items:
        name, raw = _split_pair(item)
        try:
            out[name] = float(raw)
        except ValueError:
            raise ValueError(f"metric {name!r} has non-numeric value: {raw!r}")
    return out


def parse_label_pairs(items: Iterable[str]) -> Dict[str, str]:
    """解析 `label=value` 列表为 grouping key（顺序即 URL 路径顺序）。"""

    out: Dict[str, str] = {}
    for item in items:
        label, value = _split_pair(item)
        out[label] = value
    return out
