"""
at-review - tests/*의 html/json 정보로 테스트 리뷰 문서 생성

tests/support.json의 AT 목록과 패턴별 commands.json을 바탕으로
패턴마다 review/<pattern>.html, 그리고 index.html을 생성.

사용법:
    # 현재 디렉토리의 tests/ → ./review/, ./index.html
    at-review

    # 출력 위치 지정
    at-review --outDir build

    # git 조회 없이 (byte 동일 재생성 확인용)
    at-review --config ci.yaml
"""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from at_review.config import load_config
from at_review.services.build import build_reviews

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="at-review",
        description="테스트 플랜 리뷰 문서 생성",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-o",
        "--outDir",
        dest="out_dir",
        type=str,
        default="",
        help="출력 디렉토리 (기본: --root)",
    )
    parser.add_argument(
        "--root",
        type=str,
        default=".",
        help="tests/ 를 포함한 프로젝트 루트 (기본: 현재 디렉토리)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="설정 YAML 경로 (기본: default.yaml)",
    )
    parser.add_argument(
        "--templates",
        type=str,
        default=None,
        help="Jinja2 템플릿 디렉토리 (기본: 내장 템플릿)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_dir = Path(args.root).resolve()
    out_dir = (root_dir / args.out_dir) if args.out_dir else root_dir
    config = load_config(Path(args.config) if args.config else None)
    template_dir = Path(args.templates) if args.templates else None

    result = build_reviews(
        root_dir=root_dir,
        out_dir=out_dir,
        config=config,
        template_dir=template_dir,
    )

    logger.info("=" * 50)
    logger.info(f"Rendered {len(result.reports)} patterns:")
    for report in result.reports:
        logger.info(f"  {report.pattern_name}: {report.total_tests} tests")
    logger.info("Done.")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
