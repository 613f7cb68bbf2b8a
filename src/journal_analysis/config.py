"""プロセス全体の設定値を保持する Settings を提供する。

入出力: 環境変数 -> Settings。
制約:
    - Settings はプロセス起動時に1度だけ構築し、依存先へ注入する
    - 数値項目が不正な場合は起動時に ValueError とする

Note:
    - APIキーの有無は構築時ではなく分析呼び出し時に判定する
    - テストでは Settings(...) を直接組み立てて差し替える
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_MODEL = "gemini-1.5-flash-latest"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class Settings:
    """サービス設定。"""

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """環境変数から Settings を構築する。

        Args:
            environ: 参照する環境変数（未指定時は os.environ）

        Returns:
            Settings: 構築済み設定

        Raises:
            ValueError: PORT/GEMINI_TIMEOUT が数値として解釈できない場合
        """
        env = os.environ if environ is None else environ

        # 空文字のキーは未設定として扱う。
        api_key = (env.get("GEMINI_API_KEY") or "").strip() or None

        try:
            port = int(env.get("PORT", "3000"))
        except ValueError as exc:
            raise ValueError(f"PORT must be an integer: {env.get('PORT')!r}") from exc

        try:
            timeout = float(env.get("GEMINI_TIMEOUT", "30"))
        except ValueError as exc:
            raise ValueError(
                f"GEMINI_TIMEOUT must be a number: {env.get('GEMINI_TIMEOUT')!r}"
            ) from exc
        if timeout <= 0:
            raise ValueError("GEMINI_TIMEOUT must be positive")

        return cls(
            api_key=api_key,
            model=env.get("GEMINI_MODEL", DEFAULT_MODEL),
            base_url=env.get("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            request_timeout=timeout,
            host=env.get("HOST", "0.0.0.0"),
            port=port,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
