"""
Pytest fixtures for the review build tests.

테스트 구성:
- tmp_path 아래에 최소 tests/ 트리(support.json + 패턴 디렉토리) 생성
- git 조회는 NullGitMetadata로 대체 (출력 고정)
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from at_review.config import DEFAULT_CONFIG, _merge
from at_review.core.registry import ATRegistry

# =============================================================================
# Sample Data
# =============================================================================

SUPPORT_DATA: dict[str, Any] = {
    "ats": [
        {"name": "JAWS", "key": "jaws"},
        {"name": "NVDA", "key": "nvda"},
        {"name": "VoiceOver for macOS", "key": "voiceover_macos"},
    ],
    "modeInstructions": {
        "reading": {
            "jaws": "Verify the Virtual Cursor is active.",
            "nvda": "Insure NVDA is in browse mode.",
        },
        "interaction": {
            "jaws": "Verify the PC Cursor is active.",
            "nvda": "If NVDA did not make the focus mode sound, press Insert+Space.",
        },
    },
}

CHECKBOX_COMMANDS: dict[str, Any] = {
    "navigate to checkbox": {
        "reading": {
            "jaws": [["X"], ["TAB", "(with checkbox focused)"]],
            "nvda": [["X"], ["down,down"]],
        },
    },
    "operate checkbox": {
        "interaction": {
            "jaws": [["space"]],
            "nvda": [["space"]],
        },
    },
}

ARIA_HELP = "https://www.w3.org/TR/wai-aria-1.2/#checkbox"
APG_HELP = "https://w3c.github.io/aria-practices/examples/checkbox/checkbox-1/checkbox-1.html"

SETUP_SCRIPT_BODY = (
    "  // check the first checkbox\n"
    "\n"
    "  testPageDocument.querySelector('[role=\"checkbox\"]').click();\n"
)


def fixture_html(title: str | None, help_hrefs: list[str] | tuple[str, ...] = ()) -> str:
    """테스트 fixture HTML 생성."""
    head = [f"<title>{title}</title>"] if title is not None else []
    head += [f'<link rel="help" href="{href}">' for href in help_hrefs]
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        + "\n".join(head)
        + "\n</head>\n<body></body>\n</html>\n"
    )


def write_fixture(
    pattern_dir: Path,
    stem: str,
    title: str | None,
    metadata: dict[str, Any] | None,
    help_hrefs: list[str] | tuple[str, ...] = (),
) -> Path:
    """<stem>.html + <stem>.json 작성 후 html 경로 반환."""
    pattern_dir.mkdir(parents=True, exist_ok=True)
    html_path = pattern_dir / f"{stem}.html"
    html_path.write_text(fixture_html(title, help_hrefs), encoding="utf-8")
    if metadata is not None:
        (pattern_dir / f"{stem}.json").write_text(json.dumps(metadata), encoding="utf-8")
    return html_path


def write_pattern_data(
    pattern_dir: Path,
    commands: dict[str, Any] | None = None,
    reference: str = "reference/2020-11-23_175030/checkbox-1/checkbox-1.html",
    scripts: dict[str, str] | None = None,
) -> None:
    """commands.json, data/references.csv, data/js/*.js 작성."""
    data_dir = pattern_dir / "data"
    data_dir.mkdir(parents=True, exist_ok=True)

    (pattern_dir / "commands.json").write_text(
        json.dumps(commands if commands is not None else {}),
        encoding="utf-8",
    )
    (data_dir / "references.csv").write_text(
        f"refId,value\nreference,{reference}\n",
        encoding="utf-8",
    )

    if scripts:
        js_dir = data_dir / "js"
        js_dir.mkdir(exist_ok=True)
        for name, body in scripts.items():
            (js_dir / f"{name}.js").write_text(body, encoding="utf-8")


def reading_metadata(**overrides: Any) -> dict[str, Any]:
    """navigate to checkbox (reading) 메타데이터."""
    data: dict[str, Any] = {
        "task": "navigate to checkbox",
        "mode": "reading",
        "applies_to": ["Screen Readers"],
        "specific_user_instruction": "Navigate to the first checkbox.",
        "output_assertions": [
            [1, "Role 'checkbox' is conveyed"],
            [2, "State 'not checked' is conveyed"],
        ],
        "additional_assertions": {
            "jaws": [[1, "Name 'Lettuce' is conveyed"]],
        },
    }
    data.update(overrides)
    return data


def interaction_metadata(**overrides: Any) -> dict[str, Any]:
    """operate checkbox (interaction) 메타데이터."""
    data: dict[str, Any] = {
        "task": "operate checkbox",
        "mode": ["interaction", "reading"],
        "applies_to": ["JAWS", "NVDA"],
        "specific_user_instruction": "Toggle the first checkbox.",
        "setupTestPage": "checkFirstCheckbox",
        "setup_script_description": "sets focus on the first checkbox",
        "output_assertions": [[1, "State change to 'checked' is conveyed"]],
        "additional_assertions": {"NVDA": []},
    }
    data.update(overrides)
    return data


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """저장소 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


# =============================================================================
# Registry Fixtures
# =============================================================================

@pytest.fixture
def support_data() -> dict[str, Any]:
    """support.json 내용 (테스트마다 새 복사본)."""
    return json.loads(json.dumps(SUPPORT_DATA))


@pytest.fixture
def registry(support_data: dict[str, Any]) -> ATRegistry:
    """jaws, nvda, voiceover_macos 레지스트리."""
    return ATRegistry.from_dict(support_data)


# =============================================================================
# Tests Tree Fixtures
# =============================================================================

@pytest.fixture
def checkbox_dir(tmp_path: Path) -> Path:
    """
    checkbox 패턴 디렉토리 (단독).

    포함:
    - test-01-navigate-to-checkbox-reading (screen readers, help 링크 2개)
    - test-02-operate-checkbox-interaction (JAWS/NVDA, setup script)
    - index.html (fixture 아님)
    """
    pattern_dir = tmp_path / "tests" / "checkbox"
    write_pattern_data(
        pattern_dir,
        commands=CHECKBOX_COMMANDS,
        scripts={"checkFirstCheckbox": SETUP_SCRIPT_BODY},
    )
    write_fixture(
        pattern_dir,
        "test-01-navigate-to-checkbox-reading",
        "Navigate to an unchecked checkbox in reading mode",
        reading_metadata(),
        [ARIA_HELP, APG_HELP],
    )
    write_fixture(
        pattern_dir,
        "test-02-operate-checkbox-interaction",
        "Operate a checkbox in interaction mode",
        interaction_metadata(),
        [ARIA_HELP],
    )
    (pattern_dir / "index.html").write_text(
        fixture_html("Checkbox test index"),
        encoding="utf-8",
    )
    return pattern_dir


@pytest.fixture
def tests_root(tmp_path: Path, checkbox_dir: Path, support_data: dict[str, Any]) -> Path:
    """
    전체 프로젝트 루트 (tmp_path).

    tests/
    - support.json
    - resources/ (skip 대상)
    - checkbox/ (테스트 2개)
    - menubar/ (index.html만, fixture 없음 → 제외)
    """
    tests_dir = tmp_path / "tests"
    (tests_dir / "support.json").write_text(json.dumps(support_data), encoding="utf-8")

    resources_dir = tests_dir / "resources"
    resources_dir.mkdir()
    (resources_dir / "at-commands.mjs").write_text("export default {};\n", encoding="utf-8")

    menubar_dir = tests_dir / "menubar"
    menubar_dir.mkdir()
    (menubar_dir / "index.html").write_text(fixture_html("Menubar index"), encoding="utf-8")

    return tmp_path


@pytest.fixture
def fixture_writer() -> Callable[..., Path]:
    """write_fixture 헬퍼."""
    return write_fixture


@pytest.fixture
def pattern_data_writer() -> Callable[..., None]:
    """write_pattern_data 헬퍼."""
    return write_pattern_data


@pytest.fixture
def offline_config() -> dict[str, Any]:
    """git 조회 비활성 설정."""
    return _merge(DEFAULT_CONFIG, {"git": {"enabled": False}})


@pytest.fixture
def make_reading_metadata() -> Callable[..., dict[str, Any]]:
    """reading 메타데이터 생성기 (키워드 인자로 필드 덮어쓰기)."""
    return reading_metadata


@pytest.fixture
def make_interaction_metadata() -> Callable[..., dict[str, Any]]:
    """interaction 메타데이터 생성기 (키워드 인자로 필드 덮어쓰기)."""
    return interaction_metadata
