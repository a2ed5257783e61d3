"""
Review Build Service: tests/ 트리 → 리뷰 문서 + index.

흐름:
1. 레지스트리(support.json) + 키 라벨 1회 로드 (실행 전체 공유)
2. 패턴 디렉토리를 발견 순서대로 순차 처리: load → report → render
3. index 렌더링, (선택) build log 저장

동시성 없음: 출력/진행 로그 순서 = 패턴 발견 순서.
입력 오류는 복구하지 않고 그대로 전파.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from at_review.config import load_config
from at_review.core.commands import load_key_labels
from at_review.core.git_meta import GitMetadata, NullGitMetadata, VersionControl
from at_review.core.logging import complete_build_log, create_build_log, save_build_log
from at_review.core.registry import ATRegistry
from at_review.domain.constants import (
    DEFAULT_SCREEN_READER_SENTINELS,
    KEYS_FILENAME,
    RESOURCES_DIRNAME,
    SUPPORT_FILENAME,
)
from at_review.domain.schemas import BuildLog, IndexEntry, PatternReport
from at_review.render.review import ReviewRenderer, output_lock
from at_review.services.loader import discover_patterns, load_test_plan
from at_review.services.report import PatternReportBuilder, ResolverFactory, commands_table_factory

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """빌드 결과."""
    reports: list[PatternReport] = field(default_factory=list)
    review_files: list[Path] = field(default_factory=list)
    index_file: Path | None = None
    build_log: BuildLog | None = None
    build_log_file: Path | None = None


def collect_reports(
    tests_dir: Path,
    registry: ATRegistry,
    config: dict[str, Any],
    vcs: VersionControl,
    resolver_factory: ResolverFactory | None = None,
    build_log: BuildLog | None = None,
) -> list[tuple[PatternReport, IndexEntry]]:
    """
    모든 패턴의 PatternReport + index 행 생성 (렌더링 없음).

    Args:
        tests_dir: tests/ 경로
        registry: AT 레지스트리
        config: 병합된 설정
        vcs: version-control 경계
        resolver_factory: 패턴별 CommandResolver 생성기 (기본: CommandsTable)
        build_log: 경고 기록용 BuildLog

    Returns:
        (report, index entry) 목록 - 패턴 발견 순서
    """
    review_config = config.get("review", {})
    sentinels = review_config.get(
        "screen_reader_sentinels", DEFAULT_SCREEN_READER_SENTINELS
    )
    sort_tests = review_config.get("sort_tests", True)
    skip_dirs = config.get("paths", {}).get("skip_dirs", [])

    if resolver_factory is None:
        key_labels = load_key_labels(tests_dir / RESOURCES_DIRNAME / KEYS_FILENAME)
        resolver_factory = commands_table_factory(registry, key_labels)

    builder = PatternReportBuilder(registry, resolver_factory, vcs, build_log)

    results = []
    for pattern_dir in discover_patterns(tests_dir, skip_dirs):
        plan = load_test_plan(pattern_dir, sentinels, sort_tests)
        if plan is None:
            continue

        report = builder.build(plan)
        if report is None:
            continue

        results.append((report, builder.index_entry(report, plan)))

    return results


def build_reviews(
    root_dir: Path,
    out_dir: Path | None = None,
    config: dict[str, Any] | None = None,
    template_dir: Path | None = None,
    vcs: VersionControl | None = None,
    resolver_factory: ResolverFactory | None = None,
) -> BuildResult:
    """
    리뷰 문서 전체 빌드.

    Args:
        root_dir: 프로젝트 루트 (tests/ 포함)
        out_dir: 출력 루트 (기본: root_dir)
        config: 병합된 설정 (기본: load_config())
        template_dir: 템플릿 디렉토리 (기본: 내장 템플릿)
        vcs: version-control 경계 (기본: git.enabled에 따라 Git/Null)
        resolver_factory: 패턴별 CommandResolver 생성기

    Returns:
        BuildResult

    Raises:
        ReviewBuildError: 입력 오류 전반
    """
    if config is None:
        config = load_config()

    paths = config.get("paths", {})
    output = config.get("output", {})

    out_dir = (out_dir or root_dir).resolve()
    tests_dir = (root_dir / paths.get("tests_dir", "tests")).resolve()
    review_dirname = paths.get("review_dir", "review")
    review_dir = out_dir / review_dirname

    if vcs is None:
        vcs = GitMetadata() if config.get("git", {}).get("enabled", True) else NullGitMetadata()

    build_log = create_build_log()
    registry = ATRegistry.load(tests_dir / SUPPORT_FILENAME)
    renderer = ReviewRenderer(template_dir)

    result = BuildResult(build_log=build_log)

    try:
        collected = collect_reports(
            tests_dir,
            registry,
            config,
            vcs,
            resolver_factory,
            build_log,
        )

        with output_lock(out_dir, output.get("lock_timeout", 10.0)):
            for report, _ in collected:
                review_file = renderer.write_review(report, registry.ats, review_dir)
                logger.info(f"Summarized {report.pattern_name} tests: {review_file}")
                result.reports.append(report)
                result.review_files.append(review_file)
                build_log.patterns.append(report.pattern_name)

            result.index_file = renderer.write_index(
                [entry for _, entry in collected],
                out_dir,
                review_dirname,
            )
            logger.info(f"Generated: {result.index_file}")

    except Exception:
        complete_build_log(build_log, success=False)
        raise

    complete_build_log(build_log, success=True)

    if build_log.warnings:
        logger.info(f"{len(build_log.warnings)} (test, AT) pairs without command data")

    if output.get("save_build_log", False):
        result.build_log_file = save_build_log(build_log, out_dir)
        logger.info(f"Build log: {result.build_log_file}")

    return result
