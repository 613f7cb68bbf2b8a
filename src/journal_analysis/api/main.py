"""日記分析 API エンドポイントを提供する。

入出力: GET /health, POST /api/analyze -> JSONレスポンス。
制約:
    - /health は常に 200 と {"status":"ok"} を返す
    - /api/analyze は入力不正時に 400、それ以外の失敗時に 500 を返す
    - エラー本文は {"error": <メッセージ>} の形に統一する

Note:
    - /api/analyze は AnalysisProxy を経由してプロバイダを呼び出す
    - 失敗時レスポンスは内部詳細を漏らさない固定文言に留める
"""

from __future__ import annotations

import logging
from typing import Any

import uvicorn
from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from journal_analysis.config import Settings
from journal_analysis.inference.errors import AnalysisError, ValidationError
from journal_analysis.inference.proxy import AnalysisProxy

logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
    """/api/analyze のリクエストボディ。

    Args:
        entry: 分析対象の日記本文
    """

    entry: str | None = None


def create_app(
    settings: Settings | None = None,
    proxy: AnalysisProxy | None = None,
) -> FastAPI:
    """FastAPI アプリケーションを構築する。

    Args:
        settings: サービス設定（未指定時は環境変数から構築）
        proxy: 分析プロキシ（未指定時は settings から生成）

    Returns:
        FastAPI: ルーティングと例外ハンドラ登録済みのアプリ
    """
    settings = settings or Settings.from_env()
    proxy = proxy or AnalysisProxy(settings)

    app = FastAPI(title="journal-analysis", version="0.1.0")
    app.state.settings = settings
    app.state.proxy = proxy

    @app.exception_handler(AnalysisError)
    async def handle_analysis_error(request: Request, exc: AnalysisError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # ボディ欠落・JSON不正も「本文なし」と同じ 400 に揃える。
        return JSONResponse(
            status_code=ValidationError.status_code,
            content={"error": ValidationError.message},
        )

    @app.get("/health")
    def health() -> dict[str, str]:
        """ヘルスチェック結果を返す。

        Returns:
            dict[str, str]: サービス正常時に {"status": "ok"} を返す
        """
        return {"status": "ok"}

    @app.post("/api/analyze")
    def analyze(req: AnalyzeRequest) -> dict[str, Any]:
        """日記本文を分析し、感情スコアと提案一覧を返す。

        Args:
            req: entry を含む入力モデル

        Returns:
            dict[str, Any]: プロバイダが返した AnalysisResult

        Raises:
            AnalysisError: 入力不正・設定不備・プロバイダ失敗時
        """
        return proxy.analyze(req.entry)

    return app


# uvicorn journal_analysis.api.main:app で起動した場合も .env を反映する。
load_dotenv(find_dotenv(usecwd=True))
app = create_app()


def main() -> None:
    """.env を読み込み、uvicorn でサービスを起動する。"""
    load_dotenv(find_dotenv(usecwd=True))
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.api_key:
        logger.warning("GEMINI_API_KEY is not set; /api/analyze will return 500")
    logger.info("Server running at http://%s:%s", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
