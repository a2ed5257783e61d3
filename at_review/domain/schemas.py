"""
Data schemas for the review build.

규칙:
- 필드명 통일: 메타데이터 JSON 키와 의미가 같은 필드는 같은 이름(snake_case)
- 로드 후 불변: registry / descriptor / record는 frozen
- sentinel 인코딩(mode list, applies_to 문구)은 로드 시점에 정규화
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# =============================================================================
# AT Registry
# =============================================================================

@dataclass(frozen=True)
class AssistiveTechnology:
    """레지스트리의 AT 항목 (key는 소문자 정규화)."""
    key: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "name": self.name}


# =============================================================================
# Applicability (tagged value)
# =============================================================================

@dataclass(frozen=True)
class AllKnownATs:
    """applies_to가 screen reader sentinel → 레지스트리 전체."""


@dataclass(frozen=True)
class ExplicitATs:
    """applies_to에 명시된 AT 키 목록 (선언 순서 유지)."""
    keys: tuple[str, ...]


Applicability = AllKnownATs | ExplicitATs


# =============================================================================
# Test Plan (loader 출력)
# =============================================================================

RawAssertion = tuple[Any, str]  # (priority code, description)


@dataclass(frozen=True)
class SetupScript:
    """data/js/<name>.js → 리뷰 문서에 포함될 함수 본문."""
    name: str
    source: str


@dataclass(frozen=True)
class TestDescriptor:
    """
    테스트 fixture 1개 (<name>.html + <name>.json).

    mode/applicability는 이미 정규화된 상태:
    - mode: 단일 문자열
    - applicability: AllKnownATs | ExplicitATs
    """
    __test__ = False

    file_name: str
    path: Path
    name: str
    location: str
    reference_path: str
    task: str
    mode: str
    user_instruction: str
    applies_to: tuple[str, ...]  # 원문 (표시용)
    applicability: Applicability
    default_assertions: tuple[RawAssertion, ...] = ()
    at_assertion_overrides: dict[str, tuple[RawAssertion, ...]] = field(default_factory=dict)
    setup_script_name: str | None = None
    setup_script_description: str | None = None
    help_hrefs: tuple[str, ...] = ()


@dataclass
class TestPlan:
    """패턴 디렉토리 1개의 로드 결과."""
    __test__ = False

    pattern: str
    directory: Path
    reference: str
    commands: dict[str, Any]
    descriptors: list[TestDescriptor] = field(default_factory=list)
    setup_scripts: list[SetupScript] = field(default_factory=list)


# =============================================================================
# Assembled Records
# =============================================================================

@dataclass(frozen=True)
class Assertion:
    """병합 후 assertion. priority: "required" | "optional" | ""."""
    priority: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"priority": self.priority, "description": self.description}


@dataclass(frozen=True)
class HelpLink:
    """분류된 help 링크."""
    link: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"link": self.link, "text": self.text}


@dataclass(frozen=True)
class ATTestRecord:
    """
    (test, AT) 쌍 1개.

    commands=None: 해당 (mode, task, AT) 조합에 명령 데이터 없음 (허용)
    assertions=None: override/default 모두 비어 있음
    """
    at_key: str
    at_name: str
    commands: tuple[str, ...] | None
    assertions: tuple[Assertion, ...] | None
    user_instruction: str
    mode_instruction: str
    setup_script_description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "at_key": self.at_key,
            "at_name": self.at_name,
            "commands": list(self.commands) if self.commands is not None else None,
            "assertions": (
                [a.to_dict() for a in self.assertions]
                if self.assertions is not None
                else None
            ),
            "user_instruction": self.user_instruction,
            "mode_instruction": self.mode_instruction,
            "setup_script_description": self.setup_script_description,
        }


@dataclass
class ReviewTest:
    """리뷰 문서의 테스트 1개 (번호 부여 후)."""
    test_number: int
    name: str
    location: str
    reference: str
    applies_to: tuple[str, ...]
    setup_script_name: str | None
    task: str
    mode: str
    at_tests: list[ATTestRecord] = field(default_factory=list)
    help_links: list[HelpLink] = field(default_factory=list)
    last_edited: str = ""

    @property
    def applies_to_formatted(self) -> str:
        return ", ".join(self.applies_to)

    def to_dict(self) -> dict[str, Any]:
        return {
            "test_number": self.test_number,
            "name": self.name,
            "location": self.location,
            "reference": self.reference,
            "applies_to": list(self.applies_to),
            "applies_to_formatted": self.applies_to_formatted,
            "setup_script_name": self.setup_script_name,
            "task": self.task,
            "mode": self.mode,
            "at_tests": [r.to_dict() for r in self.at_tests],
            "help_links": [h.to_dict() for h in self.help_links],
            "last_edited": self.last_edited,
        }


@dataclass
class PatternReport:
    """패턴 1개의 리뷰 문서 입력. tests가 비면 생성되지 않음."""
    pattern_name: str
    tests: list[ReviewTest] = field(default_factory=list)
    setup_scripts: list[SetupScript] = field(default_factory=list)

    @property
    def total_tests(self) -> int:
        return len(self.tests)


@dataclass(frozen=True)
class IndexEntry:
    """index 문서의 패턴 행."""
    name: str
    number_of_tests: int
    commit: str
    commit_description: str


# =============================================================================
# Build Log Schemas
# =============================================================================

@dataclass
class WarningLog:
    """
    경고 로그.

    필수 컨텍스트: level, code, pattern, test, at_key, message
    """
    level: str = "warning"
    code: str = ""
    pattern: str = ""
    test: str = ""
    at_key: str = ""
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "pattern": self.pattern,
            "test": self.test,
            "at_key": self.at_key,
            "message": self.message,
        }


@dataclass
class BuildLog:
    """
    빌드 실행 로그.

    run 단위 결과 및 허용된 gap(경고) 기록.
    """
    run_id: str
    started_at: str  # ISO 8601
    finished_at: str | None = None
    result: str = "pending"  # pending, success, failed

    patterns: list[str] = field(default_factory=list)
    warnings: list[WarningLog] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "patterns": list(self.patterns),
            "warnings": [w.to_dict() for w in self.warnings],
        }
