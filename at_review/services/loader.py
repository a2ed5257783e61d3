"""
Test Plan Loader: 패턴 디렉토리 → TestPlan (raw descriptor 모음).

입력 (tests/<pattern>/):
- commands.json: CommandsTable이 그대로 소비
- data/references.csv: "reference," 행의 두 번째 필드 = canonical reference fixture
- data/js/*.js: setup script 본문 (비어 있지 않은 줄만, trim)
- <name>.html: <title> + <link rel="help" href>
- <name>.json: 메타데이터

규칙:
- 입력 누락/손상 → ReviewBuildError (재시도 없음)
- fixture가 없는 디렉토리 → None (조용히 제외, 다른 파일도 읽지 않음)
- 발견 순서: 파일명 정렬 (sort_tests=false면 파일시스템 순서)
"""

import json
import logging
import re
from collections.abc import Iterable
from html import unescape
from html.parser import HTMLParser
from pathlib import Path
from typing import Any

from at_review.core.applicability import parse_applicability
from at_review.core.assembler import normalize_mode
from at_review.core.commands import load_commands_json
from at_review.domain.constants import (
    COMMANDS_FILENAME,
    DATA_DIRNAME,
    DEFAULT_SCREEN_READER_SENTINELS,
    INDEX_FIXTURE_FILENAME,
    REFERENCE_ROW_PREFIX,
    REFERENCES_FILENAME,
    SCRIPTS_DIRNAME,
)
from at_review.domain.errors import ErrorCodes, ReviewBuildError
from at_review.domain.schemas import RawAssertion, SetupScript, TestDescriptor, TestPlan

logger = logging.getLogger(__name__)


# =============================================================================
# HTML Fixture Parsing
# =============================================================================

class _FixtureParser(HTMLParser):
    """<title> 텍스트와 rel=help 링크만 수집."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.title_chunks: list[str] = []
        self.has_title = False
        self.in_title = False
        self.help_hrefs: list[str] = []

    def handle_starttag(self, tag: str, attrs_in: list[tuple[str, str | None]]) -> None:
        self._tag(tag, attrs_in)

    def handle_startendtag(self, tag: str, attrs_in: list[tuple[str, str | None]]) -> None:
        self._tag(tag, attrs_in)

    def _tag(self, tag: str, attrs_in: list[tuple[str, str | None]]) -> None:
        t = tag.lower()
        if t == "title" and not self.has_title:
            self.has_title = True
            self.in_title = True
        elif t == "link":
            attrs = {k.lower(): (v or "") for k, v in attrs_in}
            rel_tokens = attrs.get("rel", "").lower().split()
            if "help" in rel_tokens and "href" in attrs:
                self.help_hrefs.append(attrs["href"])

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() == "title":
            self.in_title = False

    def handle_data(self, data: str) -> None:
        if self.in_title:
            self.title_chunks.append(data)

    def handle_entityref(self, name: str) -> None:
        if self.in_title:
            self.title_chunks.append(f"&{name};")

    def handle_charref(self, name: str) -> None:
        if self.in_title:
            self.title_chunks.append(f"&#{name};")


def parse_fixture_html(html_text: str) -> tuple[str | None, list[str]]:
    """
    fixture HTML에서 테스트 이름과 help 링크 추출.

    Args:
        html_text: fixture 파일 내용

    Returns:
        (title 또는 None, help href 목록 - 문서 순서)
    """
    parser = _FixtureParser()
    parser.feed(html_text)
    parser.close()

    if not parser.has_title:
        return None, parser.help_hrefs

    title = unescape("".join(parser.title_chunks)).strip()
    return title, parser.help_hrefs


# =============================================================================
# Pattern Data Files
# =============================================================================

def read_reference(pattern_dir: Path) -> str:
    """
    data/references.csv의 reference 경로.

    Raises:
        ReviewBuildError: FILE_MISSING, REFERENCE_ROW_MISSING
    """
    csv_path = pattern_dir / DATA_DIRNAME / REFERENCES_FILENAME
    if not csv_path.exists():
        raise ReviewBuildError(ErrorCodes.FILE_MISSING, path=str(csv_path))

    text = csv_path.read_text(encoding="utf-8")
    for row in re.split(r"\r?\n", text):
        if row.startswith(REFERENCE_ROW_PREFIX):
            return row.split(",")[1]

    raise ReviewBuildError(
        ErrorCodes.REFERENCE_ROW_MISSING,
        path=str(csv_path),
        prefix=REFERENCE_ROW_PREFIX,
    )


def format_setup_script(name: str, body: str) -> str:
    """
    setup script 본문 → 이름 있는 함수 소스.

    비어 있지 않은 줄만 trim 후 탭 들여쓰기.
    """
    lines = [
        f"\t{line.strip()}\n"
        for line in re.split(r"\r?\n", body)
        if line.strip()
    ]
    return f"\t{name}: function(testPageDocument){{\n{''.join(lines)}}}"


def load_setup_scripts(pattern_dir: Path) -> list[SetupScript]:
    """data/js/*.js → SetupScript 목록 (파일명 순). 디렉토리 없으면 빈 목록."""
    scripts_dir = pattern_dir / DATA_DIRNAME / SCRIPTS_DIRNAME
    if not scripts_dir.is_dir():
        return []

    scripts = []
    for script_path in sorted(scripts_dir.glob("*.js")):
        name = script_path.name.split(".js")[0]
        body = script_path.read_text(encoding="utf-8")
        scripts.append(SetupScript(name=name, source=format_setup_script(name, body)))
    return scripts


def discover_fixtures(pattern_dir: Path, sort_tests: bool = True) -> list[Path]:
    """패턴 디렉토리의 테스트 fixture (*.html, index.html 제외)."""
    fixtures = [
        p for p in pattern_dir.iterdir()
        if p.is_file() and p.suffix == ".html" and p.name != INDEX_FIXTURE_FILENAME
    ]
    if sort_tests:
        fixtures.sort(key=lambda p: p.name)
    return fixtures


def discover_patterns(tests_dir: Path, skip_dirs: Iterable[str] = ()) -> list[Path]:
    """tests/ 하위 패턴 디렉토리 (이름 순, skip_dirs 제외)."""
    skip = set(skip_dirs)
    return sorted(
        (p for p in tests_dir.iterdir() if p.is_dir() and p.name not in skip),
        key=lambda p: p.name,
    )


# =============================================================================
# Test Descriptor
# =============================================================================

def _read_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ReviewBuildError(ErrorCodes.FILE_MISSING, path=str(path))
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ReviewBuildError(ErrorCodes.JSON_CORRUPT, path=str(path), error=str(e)) from e
    if not isinstance(data, dict):
        raise ReviewBuildError(
            ErrorCodes.JSON_CORRUPT,
            path=str(path),
            error="top-level value must be an object",
        )
    return data


def _to_raw_assertions(
    items: Any,
    test_name: str,
    field_name: str,
) -> tuple[RawAssertion, ...]:
    """[[priority, description], ...] → 튜플."""
    if items is None:
        return ()
    try:
        return tuple((item[0], str(item[1])) for item in items)
    except (TypeError, IndexError, KeyError) as e:
        raise ReviewBuildError(
            ErrorCodes.JSON_CORRUPT,
            test=test_name,
            field=field_name,
            error=str(e),
        ) from e


def _require(data: dict[str, Any], key: str, test_name: str) -> Any:
    if data.get(key) is None:
        raise ReviewBuildError(
            ErrorCodes.MISSING_REQUIRED_FIELD,
            test=test_name,
            field=key,
        )
    return data[key]


def load_descriptor(
    fixture_path: Path,
    pattern: str,
    reference: str,
    sentinels: Iterable[str] = DEFAULT_SCREEN_READER_SENTINELS,
) -> TestDescriptor:
    """
    fixture 1개 (<name>.html + <name>.json) → TestDescriptor.

    Args:
        fixture_path: <name>.html 경로
        pattern: 패턴 이름
        reference: references.csv의 reference 경로
        sentinels: applies_to sentinel 문구

    Returns:
        정규화된 TestDescriptor

    Raises:
        ReviewBuildError: TITLE_MISSING, FILE_MISSING, JSON_CORRUPT,
            MISSING_REQUIRED_FIELD, APPLIES_TO_EMPTY
    """
    file_name = fixture_path.name
    title, help_hrefs = parse_fixture_html(fixture_path.read_text(encoding="utf-8"))
    if title is None:
        raise ReviewBuildError(ErrorCodes.TITLE_MISSING, path=str(fixture_path))

    data = _read_json(fixture_path.with_suffix(".json"))

    applies_to = tuple(str(a) for a in (data.get("applies_to") or ()))
    overrides = data.get("additional_assertions") or {}

    return TestDescriptor(
        file_name=file_name,
        path=fixture_path,
        name=title,
        location=f"/{pattern}/{file_name}",
        reference_path=f"/{pattern}/{reference}",
        task=str(_require(data, "task", file_name)),
        mode=normalize_mode(_require(data, "mode", file_name), file_name),
        user_instruction=data.get("specific_user_instruction") or "",
        applies_to=applies_to,
        applicability=parse_applicability(applies_to, file_name, sentinels),
        default_assertions=_to_raw_assertions(
            data.get("output_assertions"), file_name, "output_assertions"
        ),
        at_assertion_overrides={
            str(at_key).lower(): _to_raw_assertions(items, file_name, "additional_assertions")
            for at_key, items in overrides.items()
        },
        setup_script_name=data.get("setupTestPage"),
        setup_script_description=data.get("setup_script_description"),
        help_hrefs=tuple(help_hrefs),
    )


# =============================================================================
# Test Plan
# =============================================================================

def load_test_plan(
    pattern_dir: Path,
    sentinels: Iterable[str] = DEFAULT_SCREEN_READER_SENTINELS,
    sort_tests: bool = True,
) -> TestPlan | None:
    """
    패턴 디렉토리 1개 로드.

    Args:
        pattern_dir: tests/<pattern> 경로
        sentinels: applies_to sentinel 문구
        sort_tests: fixture 파일명 정렬 여부

    Returns:
        TestPlan, fixture가 없으면 None
    """
    fixtures = discover_fixtures(pattern_dir, sort_tests)
    if not fixtures:
        logger.debug(f"No test fixtures in {pattern_dir}, skipping")
        return None

    pattern = pattern_dir.name
    commands = load_commands_json(pattern_dir / COMMANDS_FILENAME)
    reference = read_reference(pattern_dir)
    sentinels = tuple(sentinels)

    return TestPlan(
        pattern=pattern,
        directory=pattern_dir,
        reference=reference,
        commands=commands,
        descriptors=[
            load_descriptor(fixture, pattern, reference, sentinels)
            for fixture in fixtures
        ],
        setup_scripts=load_setup_scripts(pattern_dir),
    )
