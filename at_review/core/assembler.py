"""
Test Record Assembler: TestDescriptor → AT별 ATTestRecord 목록.

처리 순서 (AT마다, applicability 해석 순서대로):
1. 레지스트리에서 AT 조회 (해석 후에는 항상 성공)
2. 명령 조회 → NoCommandData면 commands=None (허용, 경고만 기록)
3. mode 안내문 조회 (항상 값 있음)
4. assertion 병합
5. ATTestRecord 생성

주의: 명령 누락만 허용 (경고), 나머지 입력 오류는 전파.
"""

import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlsplit

from at_review.core.applicability import resolve_applicable_ats
from at_review.core.assertions import merge_assertions
from at_review.core.commands import CommandResolver
from at_review.core.logging import emit_warning
from at_review.core.registry import ATRegistry
from at_review.domain.constants import (
    APG_EXAMPLE_LABEL,
    APG_EXAMPLES_SEGMENT,
    ARIA_SPEC_LABEL,
)
from at_review.domain.errors import ErrorCodes, NoCommandData, ReviewBuildError, WarningCodes
from at_review.domain.schemas import ATTestRecord, BuildLog, HelpLink, TestDescriptor

logger = logging.getLogger(__name__)


def normalize_mode(mode: Any, test_name: str = "") -> str:
    """
    mode 정규화: 문자열 그대로, 목록이면 첫 요소.

    Raises:
        ReviewBuildError: MISSING_REQUIRED_FIELD (빈 목록/누락)
    """
    if isinstance(mode, str):
        return mode
    if isinstance(mode, Sequence) and mode:
        return str(mode[0])
    raise ReviewBuildError(
        ErrorCodes.MISSING_REQUIRED_FIELD,
        test=test_name,
        field="mode",
    )


def classify_help_link(href: str, test_name: str = "") -> HelpLink:
    """
    help 링크 분류.

    - fragment(#) 있음 → "ARIA specification: <fragment>"
    - 경로에 examples/ 있음 → "APG example: <examples/ 이후>"
    - 둘 다 아님 → 입력 오류

    Raises:
        ReviewBuildError: HELP_LINK_MALFORMED
    """
    if "#" in href:
        fragment = href.split("#")[1]
        return HelpLink(link=href, text=f"{ARIA_SPEC_LABEL}: {fragment}")

    path = urlsplit(href).path or href
    if APG_EXAMPLES_SEGMENT in path:
        example = href.split(APG_EXAMPLES_SEGMENT, 1)[1]
        return HelpLink(link=href, text=f"{APG_EXAMPLE_LABEL}: {example}")

    raise ReviewBuildError(
        ErrorCodes.HELP_LINK_MALFORMED,
        test=test_name,
        href=href,
    )


def classify_help_links(hrefs: Sequence[str], test_name: str = "") -> list[HelpLink]:
    """선언 순서대로 help 링크 분류."""
    return [classify_help_link(href, test_name) for href in hrefs]


class TestRecordAssembler:
    """
    (test, AT) 레코드 조립기.

    레지스트리와 resolver는 주입되는 읽기 전용 의존성.

    Usage:
        assembler = TestRecordAssembler(registry, resolver, build_log)
        at_tests = assembler.assemble(descriptor, pattern="checkbox")
    """

    __test__ = False

    def __init__(
        self,
        registry: ATRegistry,
        resolver: CommandResolver,
        build_log: BuildLog | None = None,
    ) -> None:
        self.registry = registry
        self.resolver = resolver
        self.build_log = build_log

    def assemble(self, descriptor: TestDescriptor, pattern: str = "") -> list[ATTestRecord]:
        """
        descriptor 1개의 AT별 레코드 생성.

        Args:
            descriptor: 로드된 테스트 descriptor
            pattern: 경고 기록용 패턴 이름

        Returns:
            ATTestRecord 목록 (applicability 해석 순서)

        Raises:
            ReviewBuildError: UNKNOWN_AT, APPLIES_TO_EMPTY 등
        """
        at_keys = resolve_applicable_ats(
            descriptor.applicability,
            self.registry,
            descriptor.file_name,
        )

        return [
            self._assemble_one(descriptor, at_key, pattern)
            for at_key in at_keys
        ]

    def _assemble_one(
        self,
        descriptor: TestDescriptor,
        at_key: str,
        pattern: str,
    ) -> ATTestRecord:
        at = self.registry.get(at_key)
        mode = descriptor.mode
        task = descriptor.task

        commands: tuple[str, ...] | None
        try:
            commands = tuple(self.resolver.get_at_commands(mode, task, at)) or None
        except NoCommandData as e:
            logger.debug(f"{descriptor.file_name}: {e}")
            commands = None

        if commands is None and self.build_log is not None:
            emit_warning(
                self.build_log,
                code=WarningCodes.COMMANDS_UNAVAILABLE,
                pattern=pattern,
                test=descriptor.file_name,
                at_key=at.key,
                message=f"No commands for mode={mode!r}, task={task!r}",
            )

        return ATTestRecord(
            at_key=at.key,
            at_name=at.name,
            commands=commands,
            assertions=merge_assertions(
                descriptor.default_assertions,
                descriptor.at_assertion_overrides,
                at.key,
            ),
            user_instruction=descriptor.user_instruction,
            mode_instruction=self.resolver.get_mode_instructions(mode, at),
            setup_script_description=descriptor.setup_script_description,
        )
