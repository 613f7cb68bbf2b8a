"""プロバイダ応答エンベロープから生成テキストを取り出す。

入出力: envelope(dict) -> text(str) -> result(dict)。
制約:
    - candidates[0].content.parts[0].text の各階層を個別に検査する
    - 欠落時は階層名を含む UpstreamFormatError を送出する

Note:
    - 構造不正時は生のエンベロープ全体をログへ出し、クライアントへは返さない
"""

from __future__ import annotations

import json
import logging
from typing import Any

from journal_analysis.inference.errors import UpstreamFormatError

logger = logging.getLogger(__name__)


def _first(value: Any, name: str) -> Any:
    """非空リストの先頭要素を返す。"""
    if not isinstance(value, list) or not value:
        raise UpstreamFormatError(f"{name} missing")
    return value[0]


def _field(value: Any, key: str) -> Any:
    """辞書から key を取り出す。欠落は None。"""
    if not isinstance(value, dict):
        return None
    return value.get(key)


def _walk(envelope: Any) -> str:
    candidate = _first(_field(envelope, "candidates"), "candidates")

    content = _field(candidate, "content")
    if not isinstance(content, dict):
        raise UpstreamFormatError("content missing")

    part = _first(_field(content, "parts"), "parts")

    text = _field(part, "text")
    if not isinstance(text, str) or not text:
        raise UpstreamFormatError("text missing")
    return text


def extract_text(envelope: Any) -> str:
    """エンベロープ先頭候補の先頭パートの text を返す。

    Args:
        envelope: プロバイダ応答（JSONデコード済み）

    Returns:
        str: モデルが生成したテキスト

    Raises:
        UpstreamFormatError: いずれかの階層が欠落している場合
    """
    try:
        return _walk(envelope)
    except UpstreamFormatError as exc:
        logger.error(
            "Invalid response format from Gemini API (%s). Full response: %s",
            exc.detail,
            json.dumps(envelope, indent=2, ensure_ascii=False, default=str),
        )
        raise


def parse_result(text: str) -> Any:
    """生成テキストをJSONとして解釈する。

    Raises:
        UpstreamFormatError: JSONとして不正な場合
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("Gemini API returned text that is not valid JSON: %s", text)
        raise UpstreamFormatError("text is not valid JSON") from exc
