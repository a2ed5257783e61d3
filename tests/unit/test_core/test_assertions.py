"""
test_assertions.py - assertion 병합 테스트

DoD:
- 우선순위 매핑 total: 1 → required, 2 → optional, 그 외 → ""
- override가 비어 있지 않으면 default 대체
- 결과가 비면 None
"""

import json

import pytest

from at_review.core.assertions import merge_assertions, priority_label, select_assertions
from at_review.domain.schemas import Assertion

DEFAULTS = (
    (1, "Role 'checkbox' is conveyed"),
    (2, "State 'not checked' is conveyed"),
)

# =============================================================================
# priority_label 테스트
# =============================================================================


class TestPriorityLabel:
    """priority_label 테스트."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (1, "required"),
            ("1", "required"),
            (2, "optional"),
            (" 2 ", "optional"),
            (1.0, "required"),
            (2.0, "optional"),
            ("1.0", "required"),
            ("2abc", "optional"),
            (float("nan"), ""),
            (3, ""),
            (0, ""),
            ("high", ""),
            (None, ""),
            ([1], ""),
            (True, ""),
        ],
    )
    def test_mapping(self, code, expected: str):
        """모든 입력에 대해 예외 없이 라벨 반환."""
        assert priority_label(code) == expected


# =============================================================================
# merge_assertions 테스트
# =============================================================================


class TestMergeAssertions:
    """merge_assertions / select_assertions 테스트."""

    def test_defaults_without_override(self):
        """override 없음 → default 사용."""
        result = merge_assertions(DEFAULTS, {}, "nvda")

        assert result == (
            Assertion(priority="required", description="Role 'checkbox' is conveyed"),
            Assertion(priority="optional", description="State 'not checked' is conveyed"),
        )

    def test_override_replaces_defaults(self):
        """override 있음 → override만 사용."""
        overrides = {"jaws": ((1, "Name 'Lettuce' is conveyed"),)}

        result = merge_assertions(DEFAULTS, overrides, "jaws")

        assert result == (Assertion(priority="required", description="Name 'Lettuce' is conveyed"),)

    def test_override_for_other_at_ignored(self):
        """다른 AT의 override는 영향 없음."""
        overrides = {"jaws": ((1, "Name 'Lettuce' is conveyed"),)}

        assert select_assertions(DEFAULTS, overrides, "nvda") == DEFAULTS

    def test_empty_override_falls_back(self):
        """빈 override = override 없음."""
        assert select_assertions(DEFAULTS, {"nvda": ()}, "nvda") == DEFAULTS

    def test_empty_result_is_none(self):
        """default도 override도 없음 → None."""
        assert merge_assertions((), {}, "nvda") is None

    def test_unknown_priority_keeps_description(self):
        """알 수 없는 우선순위 → 빈 라벨, 설명 유지."""
        result = merge_assertions(((3, "Extra detail"),), {}, "nvda")

        assert result == (Assertion(priority="", description="Extra detail"),)

    def test_float_codes_from_json(self):
        """JSON 실수 우선순위 (1.0, 2.0, "1.0") → 정수 라벨."""
        defaults = json.loads('[[1.0, "a"], [2.0, "b"], ["1.0", "c"]]')

        result = merge_assertions([tuple(item) for item in defaults], {}, "nvda")

        assert [a.priority for a in result] == ["required", "optional", "required"]
