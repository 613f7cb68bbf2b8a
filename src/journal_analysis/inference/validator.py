"""分析結果ペイロードを検証する ResultValidator を提供する。

入出力: payload(dict) -> ValidationResult。
制約:
    - sentimentScore は -10〜10 の数値
    - suggestions は3件以上、各要素は title/description/category を持つ
    - category は SuggestionCategory のいずれか

Note:
    - エラーは例外ではなく issues に蓄積して返却する
    - プロバイダの構造化出力を信用しきらないための事後検証
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from journal_analysis.inference.prompt import (
    CATEGORY_VALUES,
    MIN_SUGGESTIONS,
    SENTIMENT_MAX,
    SENTIMENT_MIN,
)


@dataclass(frozen=True)
class ValidationResult:
    """バリデーション結果を表すデータ。"""

    ok: bool
    issues: list[str]


class ResultValidator:
    """AnalysisResult の契約検証を行うクラス。"""

    def validate(self, payload: Any) -> ValidationResult:
        """パース済み結果を検証し、結果を返す。

        Args:
            payload: 検証対象（json.loads の戻り値）

        Returns:
            ValidationResult: 検証可否と問題一覧
        """
        issues: list[str] = []

        if not isinstance(payload, dict) or not payload:
            return ValidationResult(ok=False, issues=["payload is empty"])

        score = payload.get("sentimentScore")
        # bool は int のサブクラスなので明示的に除外する。
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            issues.append("sentimentScore must be a number")
        elif not (SENTIMENT_MIN <= score <= SENTIMENT_MAX):
            issues.append(
                f"sentimentScore must be between {SENTIMENT_MIN} and {SENTIMENT_MAX}"
            )

        suggestions = payload.get("suggestions")
        if not isinstance(suggestions, list) or len(suggestions) < MIN_SUGGESTIONS:
            issues.append(f"suggestions must contain at least {MIN_SUGGESTIONS} items")
            return ValidationResult(ok=False, issues=issues)

        for index, suggestion in enumerate(suggestions):
            issues.extend(self._check_suggestion(index, suggestion))

        return ValidationResult(ok=not issues, issues=issues)

    def _check_suggestion(self, index: int, suggestion: Any) -> list[str]:
        if not isinstance(suggestion, dict):
            return [f"suggestions[{index}] must be an object"]

        issues: list[str] = []
        for field in ("title", "description"):
            value = suggestion.get(field)
            if not isinstance(value, str) or not value.strip():
                issues.append(f"suggestions[{index}].{field} is required")

        if suggestion.get("category") not in CATEGORY_VALUES:
            issues.append(
                f"suggestions[{index}].category must be one of {', '.join(CATEGORY_VALUES)}"
            )
        return issues
