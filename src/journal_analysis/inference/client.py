"""Gemini generateContent API を呼び出す GeminiClient を提供する。

入出力: payload(dict) -> envelope(dict)。
制約:
    - 1回の generate につき外部呼び出しは1回のみ（再試行しない）
    - すべての呼び出しに timeout を付与する

Note:
    - 通信失敗・非2xx は UpstreamCallError に変換し、詳細はログへ出す
    - _post を分離し、テストでモック可能にする
"""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

from journal_analysis.config import Settings
from journal_analysis.inference.errors import UpstreamCallError, UpstreamFormatError

logger = logging.getLogger(__name__)


class GeminiClient:
    """generateContent エンドポイントへの薄いクライアント。"""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        """GeminiClientを初期化する。

        Args:
            settings: 接続先・モデル・timeout を含む設定
            session: HTTPセッション（未指定時は新規作成）
        """
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.settings.base_url}/models/{self.settings.model}:generateContent"

    def generate(self, payload: dict[str, Any], api_key: str) -> dict[str, Any]:
        """ペイロードを送信し、応答エンベロープを返す。

        Args:
            payload: build_payload で生成したリクエスト
            api_key: プロバイダ認証キー（クエリパラメータで送る）

        Returns:
            dict[str, Any]: JSONデコード済みの応答エンベロープ

        Raises:
            UpstreamCallError: 接続失敗、タイムアウト、非2xx応答の場合
            UpstreamFormatError: 応答本文がJSONとして解釈できない場合
        """
        try:
            response = self._post(payload, api_key)
            response.raise_for_status()
        except requests.HTTPError as exc:
            logger.error(
                "Error calling Gemini API: status=%s body=%s",
                exc.response.status_code if exc.response is not None else "?",
                _describe_body(exc.response),
            )
            raise UpstreamCallError("provider returned an error status") from exc
        except requests.RequestException as exc:
            logger.error("Error calling Gemini API: %s", exc)
            raise UpstreamCallError("provider call failed") from exc

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Gemini API returned a non-JSON body: %s", response.text)
            raise UpstreamFormatError("provider body is not JSON") from exc

    def _post(self, payload: dict[str, Any], api_key: str) -> requests.Response:
        return self.session.post(
            self.endpoint,
            params={"key": api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.settings.request_timeout,
        )


def _describe_body(response: requests.Response | None) -> str:
    """エラー応答本文をログ向け文字列に整形する。"""
    if response is None:
        return "<no response>"
    try:
        return json.dumps(response.json(), indent=2, ensure_ascii=False)
    except ValueError:
        return response.text
