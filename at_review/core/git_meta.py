"""
Version-control metadata: 마지막 수정일 / 마지막 커밋 한 줄.

- 읽기 전용 git 쿼리 (동기, 재시도 없음)
- git 없음 / 저장소 아님 / 실패 → "" (리뷰 문서는 계속 생성)
- NullGitMetadata: 상수 출력 (동일 입력 → byte 동일 문서)
"""

import logging
import subprocess
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class VersionControl(Protocol):
    """report builder가 의존하는 version-control 경계."""

    def last_commit_date(self, path: Path) -> str: ...

    def last_commit_line(self, path: Path) -> str: ...


class GitMetadata:
    """git CLI 기반 구현."""

    def __init__(self, cwd: Path | None = None) -> None:
        """
        Args:
            cwd: git 명령 실행 디렉토리 (기본: 대상 경로의 부모)
        """
        self.cwd = cwd

    def _run(self, args: list[str], path: Path) -> str:
        cwd = self.cwd or (path if path.is_dir() else path.parent)
        try:
            result = subprocess.run(
                ["git", *args, str(path)],
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug(f"git unavailable for {path}: {e}")
            return ""

        if result.returncode != 0:
            logger.debug(f"git {args[0]} failed for {path}: {result.stderr.strip()}")
            return ""
        return result.stdout

    def last_commit_date(self, path: Path) -> str:
        """`git log -1 --format=%ad <path>` (따옴표/개행 제거)."""
        output = self._run(["log", "-1", "--format=%ad"], path)
        return output.replace('"', "").strip()

    def last_commit_line(self, path: Path) -> str:
        """`git log -n1 --oneline <path>`."""
        return self._run(["log", "-n1", "--oneline"], path).strip()


class NullGitMetadata:
    """git 조회 없이 빈 문자열 반환."""

    def last_commit_date(self, path: Path) -> str:
        return ""

    def last_commit_line(self, path: Path) -> str:
        return ""
