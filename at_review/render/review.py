"""
Review 렌더러: Jinja2 기반 HTML 리뷰 문서.

- 패턴별 리뷰 문서: review/<pattern>.html
- 패턴 목록 index: index.html
- 출력은 원자적 쓰기 + 출력 디렉토리 락 (동시 빌드 방지)
- 생성 시각 등 가변 값 없음: 동일 입력 → byte 동일 출력
"""

from collections.abc import Generator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from at_review.core.logging import atomic_write_text
from at_review.domain.constants import (
    INDEX_OUTPUT_FILENAME,
    OUTPUT_LOCK_FILENAME,
    REVIEW_INDEX_TEMPLATE_NAME,
    REVIEW_DIRNAME,
    REVIEW_TEMPLATE_NAME,
)
from at_review.domain.errors import ErrorCodes, ReviewBuildError
from at_review.domain.schemas import AssistiveTechnology, IndexEntry, PatternReport

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


@contextmanager
def output_lock(out_dir: Path, timeout: float = 10.0) -> Generator[None, None, None]:
    """
    출력 디렉토리 락 획득.

    동시성 보호: 같은 출력 디렉토리에 대한 동시 빌드 방지.

    Args:
        out_dir: 출력 루트
        timeout: 락 대기 시간 (초)

    Raises:
        ReviewBuildError: OUTPUT_LOCK_TIMEOUT
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    lock = FileLock(out_dir / OUTPUT_LOCK_FILENAME, timeout=timeout)

    try:
        lock.acquire()
    except Timeout as e:
        raise ReviewBuildError(
            ErrorCodes.OUTPUT_LOCK_TIMEOUT,
            out_dir=str(out_dir),
            timeout=timeout,
        ) from e

    try:
        yield
    finally:
        lock.release()


class ReviewRenderer:
    """
    리뷰 문서 렌더러.

    Usage:
        renderer = ReviewRenderer()
        renderer.write_review(report, registry.ats, review_dir)
        renderer.write_index(entries, out_dir)
    """

    def __init__(self, template_dir: Path | None = None):
        """
        Args:
            template_dir: 템플릿 디렉토리 (기본: 패키지 내장 템플릿)

        Raises:
            ReviewBuildError: TEMPLATE_NOT_FOUND
        """
        self.template_dir = template_dir or DEFAULT_TEMPLATE_DIR

        for name in (REVIEW_TEMPLATE_NAME, REVIEW_INDEX_TEMPLATE_NAME):
            if not (self.template_dir / name).exists():
                raise ReviewBuildError(
                    ErrorCodes.TEMPLATE_NOT_FOUND,
                    path=str(self.template_dir / name),
                )

        self._env: Environment | None = None

    def _load_env(self) -> Environment:
        """Jinja2 환경 로드 (lazy)."""
        if self._env is None:
            self._env = Environment(
                loader=FileSystemLoader(str(self.template_dir)),
                autoescape=select_autoescape(enabled_extensions=("html", "j2")),
                undefined=StrictUndefined,
                keep_trailing_newline=True,
            )
        return self._env

    def _render(self, template_name: str, context: dict[str, Any]) -> str:
        try:
            template = self._load_env().get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise ReviewBuildError(
                ErrorCodes.RENDER_FAILED,
                template=str(self.template_dir / template_name),
                error=str(e),
            ) from e

    def render_review(
        self,
        report: PatternReport,
        at_options: Sequence[AssistiveTechnology],
    ) -> str:
        """
        패턴 리뷰 문서 렌더링.

        Args:
            report: PatternReport
            at_options: 레지스트리 AT 목록 (선택 옵션 표시용)

        Returns:
            HTML 문자열

        Raises:
            ReviewBuildError: RENDER_FAILED
        """
        return self._render(
            REVIEW_TEMPLATE_NAME,
            {
                "pattern": report.pattern_name,
                "total_tests": report.total_tests,
                "tests": report.tests,
                "at_options": list(at_options),
                "setup_scripts": report.setup_scripts,
            },
        )

    def render_index(
        self,
        entries: Sequence[IndexEntry],
        review_dirname: str = REVIEW_DIRNAME,
    ) -> str:
        """패턴 목록 index 렌더링."""
        return self._render(
            REVIEW_INDEX_TEMPLATE_NAME,
            {"patterns": list(entries), "review_dir": review_dirname},
        )

    def write_review(
        self,
        report: PatternReport,
        at_options: Sequence[AssistiveTechnology],
        review_dir: Path,
    ) -> Path:
        """review_dir/<pattern>.html 저장 후 경로 반환."""
        output_path = review_dir / f"{report.pattern_name}.html"
        atomic_write_text(output_path, self.render_review(report, at_options))
        return output_path

    def write_index(
        self,
        entries: Sequence[IndexEntry],
        out_dir: Path,
        review_dirname: str = REVIEW_DIRNAME,
    ) -> Path:
        """out_dir/index.html 저장 후 경로 반환."""
        output_path = out_dir / INDEX_OUTPUT_FILENAME
        atomic_write_text(output_path, self.render_index(entries, review_dirname))
        return output_path
