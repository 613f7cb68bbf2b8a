"""分析処理で発生する例外の階層を提供する。

入出力: 例外クラス -> HTTPステータスとクライアント向けメッセージ。
制約:
    - message はクライアントへそのまま返却してよい文言のみを持つ
    - 診断用の詳細はログへ出力し、例外メッセージには含めない

Note:
    - API層は AnalysisError を一括で {"error": message} に変換する
"""

from __future__ import annotations

UPSTREAM_FAILURE_MESSAGE = (
    "Failed to analyze entry. The API key might be invalid or expired. "
    "Please check the server logs."
)


class AnalysisError(Exception):
    """分析処理の失敗を表す基底例外。"""

    status_code = 500
    message = "Internal server error."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class ValidationError(AnalysisError):
    """呼び出し側の入力不正（日記本文の欠落・空文字）。"""

    status_code = 400
    message = "Journal entry is required."


class ConfigurationError(AnalysisError):
    """サーバー側設定の不備（APIキー未設定）。"""

    message = "API key not configured on the server."


class UpstreamCallError(AnalysisError):
    """プロバイダ呼び出しの失敗（接続エラー、タイムアウト、非2xx）。"""

    message = UPSTREAM_FAILURE_MESSAGE


class UpstreamFormatError(AnalysisError):
    """プロバイダ応答の構造不正（本文欠落、JSON不正、契約違反）。"""

    message = UPSTREAM_FAILURE_MESSAGE
