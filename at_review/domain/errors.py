"""
Error definitions for the review build.

규칙:
- 조용한 실패 금지 → ReviewBuildError로 명시적 실패
- 입력 형태 오류(파일 누락, JSON 손상, 알 수 없는 AT 등) → 즉시 중단
- 유일한 허용 gap: (mode, task, AT) 조합의 명령 데이터 없음 → NoCommandData
"""

from typing import Any


class ReviewBuildError(Exception):
    """
    리뷰 빌드 중 입력 형태 위반 시 발생하는 에러.

    복구/재시도 없이 프로세스 경계까지 전파됨:
    - support.json / commands.json / 메타데이터 JSON 누락·손상
    - references.csv에 reference 행 없음
    - 레지스트리에 없는 AT 키
    - 분류할 수 없는 help 링크

    Usage:
        raise ReviewBuildError("UNKNOWN_AT", test="test-01.html", at_key="voiceover")
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


class NoCommandData(Exception):
    """
    (mode, task, AT) 조합에 정의된 명령 시퀀스가 없음.

    허용되는 partial failure: assembler가 잡아서 commands=None으로 기록.
    """

    def __init__(self, mode: str, task: str, at_key: str) -> None:
        self.mode = mode
        self.task = task
        self.at_key = at_key
        super().__init__(f"No commands for mode={mode!r}, task={task!r}, at={at_key!r}")


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Registry ===
    SUPPORT_FILE_MISSING = "SUPPORT_FILE_MISSING"
    SUPPORT_FILE_CORRUPT = "SUPPORT_FILE_CORRUPT"
    UNKNOWN_AT = "UNKNOWN_AT"

    # === Test Plan Load ===
    FILE_MISSING = "FILE_MISSING"
    JSON_CORRUPT = "JSON_CORRUPT"
    REFERENCE_ROW_MISSING = "REFERENCE_ROW_MISSING"
    TITLE_MISSING = "TITLE_MISSING"
    APPLIES_TO_EMPTY = "APPLIES_TO_EMPTY"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    HELP_LINK_MALFORMED = "HELP_LINK_MALFORMED"

    # === Commands ===
    COMMANDS_FILE_CORRUPT = "COMMANDS_FILE_CORRUPT"
    UNKNOWN_KEY_IDENTIFIER = "UNKNOWN_KEY_IDENTIFIER"

    # === Render ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    RENDER_FAILED = "RENDER_FAILED"
    OUTPUT_LOCK_TIMEOUT = "OUTPUT_LOCK_TIMEOUT"


# =============================================================================
# Warning Codes (build log)
# =============================================================================

class WarningCodes:
    """build log 경고 코드. 실행은 계속됨."""

    COMMANDS_UNAVAILABLE = "COMMANDS_UNAVAILABLE"
