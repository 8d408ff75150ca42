"""命令行入口。

提供 `push` / `push-add` / `delete` 子命令，便于在 cron 或批处理脚本中
直接向 Pushgateway 上报少量 Gauge 指标。

示例:
    python -m pushgw_client.run push --address localhost:9091 --job batchjob \
        --label instance=1 --metric records_processed=42
"""

from __future__ import annotations

import json as _json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import typer
import yaml

from .config import ENV_ADDRESS, GatewaySettings, load_settings, settings_from_env
from .errors import PushGatewayError
from .gateway import GatewayClient, HttpMethod
from .metrics.registry import build_registry, parse_label_pairs, parse_metric_pairs

app = typer.Typer(help="Pushgateway 客户端 CLI")

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _resolve(
    address: Optional[str],
    transport: Optional[str],
    config: Optional[str],
    job: Optional[str],
    labels: Optional[List[str]],
) -> Tuple[GatewayClient, str, Dict[str, str]]:
    """合并命令行、配置文件与环境变量，返回 (client, job, grouping_key)。

    优先级: 命令行 > `--config` 文件 > 环境变量。

    副作用:
        可能读取配置文件与环境变量；参数不完整时抛出 `typer.BadParameter`。
    """

    settings: Optional[GatewaySettings] = None
    if config:
        try:
            settings = load_settings(Path(config))
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise typer.BadParameter(f"无法加载配置 {config}: {exc}")
    elif address is None:
        try:
            settings = settings_from_env()
        except KeyError:
            raise typer.BadParameter(
                f"未提供 --address，且未设置 --config 或环境变量 {ENV_ADDRESS}"
            )

    data = settings.model_dump() if settings else {}
    if address is not None:
        data["address"] = address
    if transport is not None:
        data["transport"] = transport
    try:
        merged = GatewaySettings(**data)
        grouping = parse_label_pairs(labels) if labels else dict(merged.grouping_key)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))

    job_name = job or merged.job
    if not job_name:
        raise typer.BadParameter("未提供 --job，配置中也没有 job")
    return merged.create_client(), job_name, grouping


def _report(client: GatewayClient, method: HttpMethod, job: str, grouping: Dict[str, str]) -> None:
    typer.echo(
        _json.dumps(
            {"method": method.value, "url": client.url_for(job, grouping), "ok": True},
            ensure_ascii=False,
        )
    )


def _push(
    add: bool,
    job: Optional[str],
    metric: List[str],
    label: Optional[List[str]],
    address: Optional[str],
    transport: Optional[str],
    config: Optional[str],
    verbose: bool,
) -> None:
    _setup_logging(verbose)
    client, job_name, grouping = _resolve(address, transport, config, job, label)
    try:
        metrics = parse_metric_pairs(metric)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))
    registry = build_registry(metrics)
    try:
        if add:
            client.push_add(registry, job_name, grouping)
        else:
            client.push(registry, job_name, grouping)
    except PushGatewayError as exc:
        logger.debug("push failed", exc_info=True)
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    _report(client, HttpMethod.POST if add else HttpMethod.PUT, job_name, grouping)


@app.command()
def push(
    job: Optional[str] = typer.Option(None, "--job", help="Job 名称"),
    metric: List[str] = typer.Option(..., "--metric", help="指标 NAME=VALUE，可重复"),
    label: Optional[List[str]] = typer.Option(
        None, "--label", help="grouping key 标签 NAME=VALUE，可重复，顺序即 URL 顺序"
    ),
    address: Optional[str] = typer.Option(None, "--address", help="网关 host:port"),
    transport: Optional[str] = typer.Option(None, "--transport", help="http/https"),
    config: Optional[str] = typer.Option(None, "--config", help="网关配置 YAML 路径"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """以 PUT 推送指标，替换该 job 下的整组指标。

    副作用:
        网络请求；失败时打印错误到 stderr 并以退出码 1 结束。
    """

    _push(False, job, metric, label, address, transport, config, verbose)


@app.command("push-add")
def push_add(
    job: Optional[str] = typer.Option(None, "--job", help="Job 名称"),
    metric: List[str] = typer.Option(..., "--metric", help="指标 NAME=VALUE，可重复"),
    label: Optional[List[str]] = typer.Option(
        None, "--label", help="grouping key 标签 NAME=VALUE，可重复，顺序即 URL 顺序"
    ),
    address: Optional[str] = typer.Option(None, "--address", help="网关 host:port"),
    transport: Optional[str] = typer.Option(None, "--transport", help="http/https"),
    config: Optional[str] = typer.Option(None, "--config", help="网关配置 YAML 路径"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """以 POST 推送指标，仅替换同名指标。"""

    _push(True, job, metric, label, address, transport, config, verbose)


@app.command()
def delete(
    job: Optional[str] = typer.Option(None, "--job", help="Job 名称"),
    label: Optional[List[str]] = typer.Option(
        None, "--label", help="grouping key 标签 NAME=VALUE，可重复"
    ),
    address: Optional[str] = typer.Option(None, "--address", help="网关 host:port"),
    transport: Optional[str] = typer.Option(None, "--transport", help="http/https"),
    config: Optional[str] = typer.Option(None, "--config", help="网关配置 YAML 路径"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """删除网关上该 job（+ grouping key）的指标。"""

    _setup_logging(verbose)
    client, job_name, grouping = _resolve(address, transport, config, job, label)
    try:
        client.delete(job_name, grouping)
    except PushGatewayError as exc:
        logger.debug("delete failed", exc_info=True)
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    _report(client, client.delete_method, job_name, grouping)


def main() -> None:
    """CLI 入口包装。

    副作用:
        调用 Typer 应用进行命令行解析与执行。
    """

    app()


if __name__ == "__main__":
    main()
