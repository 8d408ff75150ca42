"""测试全局配置与模拟工具。

将 `src` 目录加入 `sys.path`，以便在未打包安装时可直接导入包；
同时提供 `requests_mock` 与记录调用的假 HTTP 客户端 fixture。
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import pytest
import requests_mock as requests_mock_lib

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from pushgw_client.clients.http import HttpResponse, RequestOptions  # noqa: E402


@dataclass
class RecordingHttpClient:
    """记录每次 `request` 调用并返回预设响应的 HTTP 客户端替身。

    属性:
        status_code: 返回的状态码。
        text: 返回的响应体。
        error: 若设置，则每次调用抛出该异常。
        calls: 调用记录 (method, url, options)。
    """

    status_code: int = 200
    text: str = ""
    error: Optional[BaseException] = None
    calls: List[Tuple[str, str, RequestOptions]] = field(default_factory=list)

    def request(self, method: str, url: str, options: RequestOptions) -> HttpResponse:
        self.calls.append((method, url, options))
        if self.error is not None:
            raise self.error
        return HttpResponse(status_code=self.status_code, text=self.text)


@pytest.fixture
def fake_http() -> RecordingHttpClient:
    """默认返回 200 的假 HTTP 客户端。"""

    return RecordingHttpClient()


@pytest.fixture
def requests_mock():
    """提供真实的 `requests_mock.Mocker`，拦截 `requests` 发出的请求。"""

    with requests_mock_lib.Mocker() as m:
        yield m
