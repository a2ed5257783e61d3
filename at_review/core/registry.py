"""
AT Registry: tests/support.json 로드.

규칙:
- 레지스트리 = 유효한 AT 키의 유일한 진실 원천
- 로드 1회, 이후 읽기 전용으로 모든 패턴에 공유
- 레지스트리 순서 = wildcard 확장 순서
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from at_review.domain.errors import ErrorCodes, ReviewBuildError
from at_review.domain.schemas import AssistiveTechnology


class ATRegistry:
    """
    알려진 AT 목록.

    Usage:
        registry = ATRegistry.load(tests_dir / "support.json")
        at = registry.get("nvda")
    """

    def __init__(
        self,
        ats: list[AssistiveTechnology],
        mode_instructions: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self._ats = tuple(ats)
        self._by_key = {at.key: at for at in self._ats}
        self.mode_instructions = mode_instructions or {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ATRegistry":
        """support.json 구조 → ATRegistry."""
        ats = [
            AssistiveTechnology(key=str(entry["key"]).lower(), name=str(entry["name"]))
            for entry in data.get("ats", [])
        ]
        return cls(ats, data.get("modeInstructions") or {})

    @classmethod
    def load(cls, support_path: Path) -> "ATRegistry":
        """
        support.json 로드.

        Args:
            support_path: tests/support.json 경로

        Returns:
            ATRegistry

        Raises:
            ReviewBuildError: SUPPORT_FILE_MISSING, SUPPORT_FILE_CORRUPT
        """
        if not support_path.exists():
            raise ReviewBuildError(
                ErrorCodes.SUPPORT_FILE_MISSING,
                path=str(support_path),
            )

        try:
            data = json.loads(support_path.read_text(encoding="utf-8"))
            return cls.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            raise ReviewBuildError(
                ErrorCodes.SUPPORT_FILE_CORRUPT,
                path=str(support_path),
                error=str(e),
            ) from e

    @property
    def ats(self) -> tuple[AssistiveTechnology, ...]:
        return self._ats

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(at.key for at in self._ats)

    def find(self, key: str) -> AssistiveTechnology | None:
        """키로 조회 (대소문자 무시). 없으면 None."""
        return self._by_key.get(key.lower())

    def get(self, key: str) -> AssistiveTechnology:
        """
        키로 조회.

        Raises:
            ReviewBuildError: UNKNOWN_AT
        """
        at = self.find(key)
        if at is None:
            raise ReviewBuildError(
                ErrorCodes.UNKNOWN_AT,
                at_key=key,
                known=list(self.keys),
            )
        return at

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._by_key

    def __iter__(self) -> Iterator[AssistiveTechnology]:
        return iter(self._ats)

    def __len__(self) -> int:
        return len(self._ats)
