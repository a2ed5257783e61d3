"""
Pattern Report Builder: TestPlan → PatternReport.

규칙:
- testNumber: 1부터 연속, 발견 순서대로 (loader가 정렬 담당)
- 테스트별 마지막 수정일: version-control 경계에서 조회
- 테스트 0개 → None (조용히 제외)
"""

import logging
from collections.abc import Callable

from at_review.core.assembler import TestRecordAssembler, classify_help_links
from at_review.core.commands import CommandResolver, CommandsTable
from at_review.core.git_meta import VersionControl
from at_review.core.registry import ATRegistry
from at_review.domain.schemas import (
    BuildLog,
    IndexEntry,
    PatternReport,
    ReviewTest,
    TestDescriptor,
    TestPlan,
)

logger = logging.getLogger(__name__)

ResolverFactory = Callable[[TestPlan], CommandResolver]


def commands_table_factory(
    registry: ATRegistry,
    key_labels: dict[str, str] | None = None,
) -> ResolverFactory:
    """패턴별 commands.json → CommandsTable 생성기."""

    def factory(plan: TestPlan) -> CommandResolver:
        return CommandsTable(plan.commands, registry.mode_instructions, key_labels)

    return factory


class PatternReportBuilder:
    """
    패턴 리포트 생성기.

    registry / resolver_factory / vcs는 실행 전체에서 공유되는 읽기 전용 의존성.

    Usage:
        builder = PatternReportBuilder(registry, factory, GitMetadata())
        report = builder.build(plan)
    """

    def __init__(
        self,
        registry: ATRegistry,
        resolver_factory: ResolverFactory,
        vcs: VersionControl,
        build_log: BuildLog | None = None,
    ) -> None:
        self.registry = registry
        self.resolver_factory = resolver_factory
        self.vcs = vcs
        self.build_log = build_log

    def build(self, plan: TestPlan) -> PatternReport | None:
        """
        TestPlan → PatternReport.

        Args:
            plan: loader 출력

        Returns:
            PatternReport, 테스트가 없으면 None
        """
        if not plan.descriptors:
            return None

        assembler = TestRecordAssembler(
            self.registry,
            self.resolver_factory(plan),
            self.build_log,
        )

        tests = [
            self._build_test(number, descriptor, assembler, plan.pattern)
            for number, descriptor in enumerate(plan.descriptors, start=1)
        ]

        return PatternReport(
            pattern_name=plan.pattern,
            tests=tests,
            setup_scripts=list(plan.setup_scripts),
        )

    def _build_test(
        self,
        number: int,
        descriptor: TestDescriptor,
        assembler: TestRecordAssembler,
        pattern: str,
    ) -> ReviewTest:
        return ReviewTest(
            test_number=number,
            name=descriptor.name,
            location=descriptor.location,
            reference=descriptor.reference_path,
            applies_to=descriptor.applies_to,
            setup_script_name=descriptor.setup_script_name,
            task=descriptor.task,
            mode=descriptor.mode,
            at_tests=assembler.assemble(descriptor, pattern),
            help_links=classify_help_links(descriptor.help_hrefs, descriptor.file_name),
            last_edited=self.vcs.last_commit_date(descriptor.path),
        )

    def index_entry(self, report: PatternReport, plan: TestPlan) -> IndexEntry:
        """index 문서용 패턴 요약 (마지막 커밋 한 줄)."""
        last_commit = self.vcs.last_commit_line(plan.directory)
        return IndexEntry(
            name=report.pattern_name,
            number_of_tests=report.total_tests,
            commit=last_commit.split(" ")[0],
            commit_description=last_commit,
        )
