"""Services layer: 테스트 플랜 로드, 패턴 리포트, 빌드."""

from .build import BuildResult, build_reviews, collect_reports
from .loader import load_test_plan, parse_fixture_html
from .report import PatternReportBuilder, commands_table_factory

__all__ = [
    "build_reviews",
    "collect_reports",
    "BuildResult",
    "load_test_plan",
    "parse_fixture_html",
    "PatternReportBuilder",
    "commands_table_factory",
]
