"""
Assertion Merger: (test, AT)별 assertion 선택 + 우선순위 라벨.

규칙:
- AT override가 있고 비어 있지 않으면 override, 아니면 default
- 우선순위 매핑은 total: 1 → required, 2 → optional, 그 외 → ""
- 결과가 비면 None (빈 목록과 "없음"을 구분)
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from at_review.domain.constants import PRIORITY_LABELS
from at_review.domain.schemas import Assertion, RawAssertion

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def priority_label(code: Any) -> str:
    """
    우선순위 코드 → 라벨. 절대 예외를 던지지 않음.

    문자열/숫자의 앞부분 정수만 사용 (1.0, "1.0", "2 " 모두 인식).

    Args:
        code: 1, "1", 2.0, "2" 등 (그 외 값은 모두 "")

    Returns:
        "required" | "optional" | ""
    """
    if isinstance(code, bool) or not isinstance(code, (int, float, str)):
        return ""
    match = _LEADING_INT.match(str(code))
    if match is None:
        return ""
    return PRIORITY_LABELS.get(int(match.group(1)), "")


def select_assertions(
    default_assertions: Sequence[RawAssertion],
    overrides: Mapping[str, Sequence[RawAssertion]],
    at_key: str,
) -> Sequence[RawAssertion]:
    """AT에 적용될 원본 assertion 목록 선택 (빈 override = override 없음)."""
    override = overrides.get(at_key)
    if override:
        return override
    return default_assertions


def merge_assertions(
    default_assertions: Sequence[RawAssertion],
    overrides: Mapping[str, Sequence[RawAssertion]],
    at_key: str,
) -> tuple[Assertion, ...] | None:
    """
    AT에 적용될 assertion 병합.

    Args:
        default_assertions: output_assertions
        overrides: additional_assertions (AT 키 → 목록)
        at_key: 대상 AT 키

    Returns:
        Assertion 튜플, 결과가 비면 None
    """
    selected = select_assertions(default_assertions, overrides, at_key)
    if not selected:
        return None

    return tuple(
        Assertion(priority=priority_label(code), description=description)
        for code, description in selected
    )
