"""pytest 実行時に `src/` 配下を import 可能にする設定を提供する。

入出力: pytest起動時の初期化 -> sys.path 更新 / 共通fixture提供。
制約:
    - アプリ本体は `src/` 配下のみを探索対象にする
    - テストごとに個別パス設定を持ち込まない

Note:
    - `journal_analysis.*` をテストから直接 import できる状態を維持する
    - 先頭挿入により同名モジュール競合の影響を最小化する
    - プロバイダ応答は requests.Response を直接組み立ててモックする
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
import requests

SRC_PATH = Path(__file__).parent / "src"

# テスト側から `journal_analysis.*` を確実に参照できるよう先頭に追加する。
sys.path.insert(0, str(SRC_PATH))

from journal_analysis.config import Settings  # noqa: E402

SAMPLE_RESULT = {
    "sentimentScore": 7,
    "suggestions": [
        {"title": "A", "description": "B", "category": "Gratitude"},
        {"title": "C", "description": "D", "category": "Connect"},
        {"title": "E", "description": "F", "category": "Meditation"},
    ],
}


@pytest.fixture
def settings() -> Settings:
    """APIキー設定済みのテスト用 Settings を返す。"""
    return Settings(api_key="test-key", request_timeout=5.0)


@pytest.fixture
def sample_result() -> dict[str, Any]:
    """契約を満たす分析結果を返す。"""
    return json.loads(json.dumps(SAMPLE_RESULT))


@pytest.fixture
def make_envelope() -> Callable[[str], dict[str, Any]]:
    """生成テキストを包んだプロバイダ応答エンベロープを作る関数を返す。"""

    def _make(text: str) -> dict[str, Any]:
        return {
            "candidates": [
                {
                    "content": {"role": "model", "parts": [{"text": text}]},
                    "finishReason": "STOP",
                }
            ]
        }

    return _make


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """ステータスと本文を指定して requests.Response を作る関数を返す。"""

    def _make(status_code: int = 200, body: Any = None, raw: bytes | None = None) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.encoding = "utf-8"
        response._content = raw if raw is not None else json.dumps(body).encode("utf-8")
        return response

    return _make


@pytest.fixture
def session() -> MagicMock:
    """post をモックした HTTP セッションを返す。"""
    return MagicMock(spec=requests.Session)
