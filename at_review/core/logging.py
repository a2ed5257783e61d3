"""
Build logging: build log 스키마, 경고 이벤트

규칙:
- 경고 필수 컨텍스트: level, code, pattern, test, at_key, message
- 허용 gap(명령 데이터 없음)은 경고로만 기록, 빌드는 계속
"""

import json
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path

from at_review.core.ids import generate_run_id
from at_review.domain.constants import LOGS_DIRNAME
from at_review.domain.schemas import BuildLog, WarningLog

# =============================================================================
# Build Log Management
# =============================================================================


def create_build_log() -> BuildLog:
    """
    새 BuildLog 생성.

    Returns:
        초기화된 BuildLog
    """
    return BuildLog(
        run_id=generate_run_id(),
        started_at=datetime.now(UTC).isoformat(),
        result="pending",
    )


def emit_warning(
    build_log: BuildLog,
    code: str,
    pattern: str,
    test: str,
    at_key: str,
    message: str,
) -> None:
    """
    경고 이벤트 기록.

    Args:
        build_log: BuildLog 인스턴스
        code: 경고 코드 (WarningCodes)
        pattern: 패턴 이름
        test: 테스트 fixture 파일명
        at_key: AT 키
        message: 경고 메시지
    """
    build_log.warnings.append(
        WarningLog(
            level="warning",
            code=code,
            pattern=pattern,
            test=test,
            at_key=at_key,
            message=message,
        )
    )


def complete_build_log(build_log: BuildLog, success: bool) -> None:
    """BuildLog 완료 처리."""
    build_log.finished_at = datetime.now(UTC).isoformat()
    build_log.result = "success" if success else "failed"


def atomic_write_text(path: Path, text: str) -> None:
    """
    원자적 텍스트 쓰기.

    동작:
    - 중간 상태 없음: temp → rename
    - 실패 시 cleanup: temp 파일 삭제
    - 기존 파일 보존: rename 실패 시 원본 유지

    Args:
        path: 저장할 파일 경로
        text: 파일 내용
    """
    dir_path = path.parent
    dir_path.mkdir(parents=True, exist_ok=True)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=dir_path,
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="",
        ) as f:
            temp_path = Path(f.name)
            f.write(text)
            f.flush()

        os.replace(temp_path, path)

    except Exception:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise


def save_build_log(build_log: BuildLog, out_dir: Path) -> Path:
    """
    BuildLog를 파일로 저장.

    Args:
        build_log: BuildLog 인스턴스
        out_dir: 출력 루트 (logs/ 하위에 저장)

    Returns:
        저장된 파일 경로
    """
    log_path = out_dir / LOGS_DIRNAME / f"build_{build_log.run_id}.json"
    atomic_write_text(
        log_path,
        json.dumps(build_log.to_dict(), indent=2, ensure_ascii=False),
    )
    return log_path
