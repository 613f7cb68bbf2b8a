"""日記本文を分析する AnalysisProxy を提供する。

入出力: entry(str) -> dict(AnalysisResult)。
制約:
    - 実行順は 入力検証 -> 設定確認 -> 送信 -> 取り出し -> パース -> 検証 に固定する
    - 入力不正・APIキー未設定の場合はプロバイダを呼び出さない
    - 再試行・キャッシュは行わず、呼び出し間で状態を共有しない

Note:
    - 成功時はパース済みオブジェクトをそのまま返す
    - 失敗はすべて AnalysisError 系の例外として呼び出し側へ送出する
"""

from __future__ import annotations

import logging
from typing import Any

from journal_analysis.config import Settings
from journal_analysis.inference.client import GeminiClient
from journal_analysis.inference.envelope import extract_text, parse_result
from journal_analysis.inference.errors import (
    ConfigurationError,
    UpstreamFormatError,
    ValidationError,
)
from journal_analysis.inference.prompt import build_payload
from journal_analysis.inference.validator import ResultValidator

logger = logging.getLogger(__name__)


class AnalysisProxy:
    """プロバイダへの分析リクエストを中継するクラス。"""

    def __init__(
        self,
        settings: Settings,
        client: GeminiClient | None = None,
        validator: ResultValidator | None = None,
    ) -> None:
        """AnalysisProxyを初期化する。

        Args:
            settings: 起動時に構築した設定
            client: プロバイダクライアント（未指定時は settings から生成）
            validator: 結果検証器（未指定時は既定ResultValidator）
        """
        self.settings = settings
        self.client = client or GeminiClient(settings)
        self.validator = validator or ResultValidator()

    def analyze(self, entry: Any) -> dict[str, Any]:
        """日記本文を分析し、AnalysisResult を返す。

        Args:
            entry: 日記本文

        Returns:
            dict[str, Any]: sentimentScore と suggestions を持つ分析結果

        Raises:
            ValidationError: entry が欠落・空文字・文字列以外の場合
            ConfigurationError: APIキーが設定されていない場合
            UpstreamCallError: プロバイダ呼び出しに失敗した場合
            UpstreamFormatError: 応答構造が不正な場合
        """
        if not isinstance(entry, str) or entry.strip() == "":
            raise ValidationError()

        api_key = self.settings.api_key
        if not api_key:
            logger.error("GEMINI_API_KEY is not set; refusing to call provider")
            raise ConfigurationError()

        envelope = self.client.generate(build_payload(entry), api_key)
        result = parse_result(extract_text(envelope))

        validation = self.validator.validate(result)
        if not validation.ok:
            logger.error(
                "Gemini API result violates the analysis contract: %s",
                ", ".join(validation.issues),
            )
            raise UpstreamFormatError("result violates contract")

        return result
