"""プロバイダへ送るリクエストペイロードを組み立てる。

入出力: entry(str) -> dict(generateContent リクエスト)。
制約:
    - 出力契約（スコア範囲・提案件数・カテゴリ）は SYSTEM_PROMPT と
      RESPONSE_SCHEMA の両方に埋め込む
    - カテゴリ一覧は SuggestionCategory を唯一の定義元とする

Note:
    - responseSchema により自由文パースを避け、構造化出力に寄せる
"""

from __future__ import annotations

import json
from copy import deepcopy
from enum import Enum
from typing import Any

SENTIMENT_MIN = -10
SENTIMENT_MAX = 10
MIN_SUGGESTIONS = 3


class SuggestionCategory(str, Enum):
    """提案カテゴリの固定集合。"""

    MEDITATION = "Meditation"
    SLEEP = "Sleep"
    PROFESSIONAL = "Professional"
    GRATITUDE = "Gratitude"
    CONNECT = "Connect"
    GENERAL = "General"


CATEGORY_VALUES = [category.value for category in SuggestionCategory]

_EXAMPLE_RESULT = {
    "sentimentScore": 7,
    "suggestions": [
        {
            "title": "Practice Gratitude",
            "description": (
                "You had a good day! Write down three things you are grateful "
                "for to reinforce that positive feeling."
            ),
            "category": "Gratitude",
        },
        {
            "title": "Connect with Others",
            "description": (
                "Sharing your joy can double it! Tell a friend or family member "
                "about your day."
            ),
            "category": "Connect",
        },
        {
            "title": "Mindful Moment",
            "description": (
                "Even on a good day, it's good to pause. Take a moment to notice "
                "your breathing."
            ),
            "category": "Meditation",
        },
    ],
}

SYSTEM_PROMPT = f"""
You are a helpful AI assistant for a mental wellness journal. Your task is to analyze a user's journal entry and provide two things in a structured JSON format: 1) a sentiment score from {SENTIMENT_MIN} (very negative) to {SENTIMENT_MAX} (very positive), and 2) a list of at least {MIN_SUGGESTIONS} personalized, actionable suggestions.
The suggestions should be based on the sentiment and context of the journal entry. They should be brief, friendly, and helpful.
Each suggestion in the list should have a 'title', 'description', and a 'category' from the following list: {CATEGORY_VALUES}.

Example JSON response:
{json.dumps(_EXAMPLE_RESULT, indent=2)}
""".strip()

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "sentimentScore": {"type": "NUMBER"},
        "suggestions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "category": {"type": "STRING"},
                },
            },
        },
    },
}


def build_user_text(entry: str) -> str:
    """日記本文をユーザーメッセージ文言に包む。"""
    return f'My journal entry: "{entry}"'


def build_payload(entry: str) -> dict[str, Any]:
    """generateContent 用のリクエストペイロードを生成する。

    Args:
        entry: 検証済みの日記本文

    Returns:
        dict[str, Any]: contents/systemInstruction/generationConfig を持つ辞書

    Note:
        - 呼び出しごとに新しい辞書を返すため、呼び出し側で変更してよい
    """
    return {
        "contents": [{"parts": [{"text": build_user_text(entry)}]}],
        "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": deepcopy(RESPONSE_SCHEMA),
        },
    }
