"""网关配置加载。

使用 Pydantic 定义最小 Schema，可从 YAML 文件或环境变量构建，
并据此创建 `GatewayClient`。

YAML 示例:
    address: pushgw:9091
    transport: https
    job: nightly_etl
    grouping_key:
      instance: worker-1
      region: eu
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .gateway import (
    ALLOWED_DELETE_METHODS,
    ALLOWED_TRANSPORTS,
    GatewayClient,
    HttpMethod,
)

ENV_ADDRESS = "PUSHGW_ADDRESS"
ENV_TRANSPORT = "PUSHGW_TRANSPORT"
ENV_JOB = "PUSHGW_JOB"


class GatewaySettings(BaseModel):
    """网关配置 Schema（禁止未知键）。

    参数:
        address: 网关 `host:port`。
        transport: `http` 或 `https`。
        job: 默认 Job 名称（可选，CLI 可覆盖）。
        grouping_key: 默认 grouping key，保持 YAML 中的顺序。
        delete_method: `delete` 使用的方法，`POST` 或 `DELETE`。
    """

    model_config = ConfigDict(extra="forbid")

    address: str
    transport: str = "http"
    job: Optional[str] = None
    grouping_key: Dict[str, str] = Field(default_factory=dict)
    delete_method: str = "POST"

    @field_validator("job", mode="before")
    @classmethod
    def _stringify_job(cls, v: Any) -> Any:
        # YAML 会把 `job: 2024` 解析为 int
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("grouping_key", mode="before")
    @classmethod
    def _stringify_grouping_key(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return {str(k): str(val) for k, val in v.items()}
        return v

    @field_validator("transport")
    @classmethod
    def _check_transport(cls, v: str) -> str:
        if v not in ALLOWED_TRANSPORTS:
            raise ValueError(f"transport must be one of {list(ALLOWED_TRANSPORTS)}")
        return v

    @field_validator("delete_method")
    @classmethod
    def _check_delete_method(cls, v: str) -> str:
        v = v.upper()
        if v not in ALLOWED_DELETE_METHODS:
            raise ValueError("delete_method must be POST or DELETE")
        return v

    def create_client(self, http_client: Any = None) -> GatewayClient:
        """按当前配置创建 `GatewayClient`。

        参数:
            http_client: 可选的共享 HTTP 客户端。

        返回值:
            GatewayClient: 新建的客户端实例。
        """

        return GatewayClient(
            self.address,
            http_client,
            self.transport,
            delete_method=HttpMethod(self.delete_method),
        )


def _read_yaml(path: Path) -> Dict[str, Any]:
    """读取 YAML 文件为字典。

    参数:
        path: YAML 文件路径。

    返回值:
        dict: 解析后的字典（空文件返回空字典）。

    副作用:
        文件 IO；错误由调用方处理。
    """

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return dict(data or {})


def load_settings(path: Path) -> GatewaySettings:
    """从 YAML 文件加载并校验网关配置。

    副作用:
        文件 IO；校验失败抛出 `pydantic.ValidationError`。
    """

    return GatewaySettings(**_read_yaml(path))


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> GatewaySettings:
    """从环境变量构建网关配置。

    参数:
        environ: 环境变量映射，缺省使用 `os.environ`。

    返回值:
        GatewaySettings: 校验后的配置。

    副作用:
        无；缺少 `PUSHGW_ADDRESS` 时抛出 KeyError。
    """

    env = os.environ if environ is None else environ
    if ENV_ADDRESS not in env:
        raise KeyError(f"missing environment variable: {ENV_ADDRESS}")
    data: Dict[str, Any] = {"address": env[ENV_ADDRESS]}
    if env.get(ENV_TRANSPORT):
        data["transport"] = env[ENV_TRANSPORT]
    if env.get(ENV_JOB):
        data["job"] = env[ENV_JOB]
    return GatewaySettings(**data)
