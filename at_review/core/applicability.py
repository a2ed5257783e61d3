"""
AT Applicability Resolver: applies_to → 구체적인 AT 키 목록.

규칙:
- sentinel 문구(대소문자 무시) → 레지스트리 전체, 레지스트리 순서
- 명시 목록 → 소문자화, 순서 유지, 중복 유지
- 레지스트리에 없는 키 → 즉시 실패 (테스트 이름 + 키 포함)
"""

from collections.abc import Iterable, Sequence

from at_review.core.registry import ATRegistry
from at_review.domain.constants import DEFAULT_SCREEN_READER_SENTINELS
from at_review.domain.errors import ErrorCodes, ReviewBuildError
from at_review.domain.schemas import AllKnownATs, Applicability, ExplicitATs


def is_screen_reader_sentinel(
    value: str,
    sentinels: Iterable[str] = DEFAULT_SCREEN_READER_SENTINELS,
) -> bool:
    """값이 "모든 screen reader" sentinel 문구인지."""
    normalized = value.strip().lower()
    return any(normalized == s.lower() for s in sentinels)


def parse_applicability(
    applies_to: Sequence[str],
    test_name: str,
    sentinels: Iterable[str] = DEFAULT_SCREEN_READER_SENTINELS,
) -> Applicability:
    """
    메타데이터 applies_to → tagged Applicability (로드 시점 1회).

    첫 요소만 sentinel 검사 대상.

    Args:
        applies_to: 메타데이터 원문 목록
        test_name: 에러 메시지용 테스트 이름
        sentinels: sentinel 문구 목록

    Returns:
        AllKnownATs 또는 ExplicitATs

    Raises:
        ReviewBuildError: APPLIES_TO_EMPTY
    """
    if not applies_to:
        raise ReviewBuildError(ErrorCodes.APPLIES_TO_EMPTY, test=test_name)

    if is_screen_reader_sentinel(str(applies_to[0]), sentinels):
        return AllKnownATs()

    return ExplicitATs(keys=tuple(str(key).lower() for key in applies_to))


def resolve_applicable_ats(
    applicability: Applicability,
    registry: ATRegistry,
    test_name: str,
) -> tuple[str, ...]:
    """
    Applicability → 비어 있지 않은 AT 키 목록.

    Args:
        applicability: 정규화된 적용 대상
        registry: AT 레지스트리
        test_name: 에러 메시지용 테스트 이름

    Returns:
        AT 키 목록 (순서 유지)

    Raises:
        ReviewBuildError: UNKNOWN_AT, APPLIES_TO_EMPTY
    """
    if isinstance(applicability, AllKnownATs):
        keys = registry.keys
    else:
        keys = applicability.keys
        for key in keys:
            if key not in registry:
                raise ReviewBuildError(
                    ErrorCodes.UNKNOWN_AT,
                    test=test_name,
                    at_key=key,
                    known=list(registry.keys),
                )

    if not keys:
        raise ReviewBuildError(ErrorCodes.APPLIES_TO_EMPTY, test=test_name)

    return tuple(keys)
