"""
Domain Constants: 빌드 전역 상수.

입력 파일명, 출력 경로, sentinel 문구 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Global Inputs (전역 입력)
# =============================================================================
# tests/
# ├── support.json          # {ats: [{key, name}], modeInstructions: {...}}
# ├── resources/keys.yaml   # 키 식별자 → 표시 라벨 (선택)
# └── <pattern>/            # 패턴 디렉토리

SUPPORT_FILENAME = "support.json"
RESOURCES_DIRNAME = "resources"
KEYS_FILENAME = "keys.yaml"

# =============================================================================
# Pattern Directory Structure (패턴 디렉토리 구조)
# =============================================================================
# tests/<pattern>/
# ├── commands.json
# ├── data/
# │   ├── references.csv
# │   └── js/*.js
# ├── <testname>.html
# └── <testname>.json

COMMANDS_FILENAME = "commands.json"
DATA_DIRNAME = "data"
REFERENCES_FILENAME = "references.csv"
SCRIPTS_DIRNAME = "js"
INDEX_FIXTURE_FILENAME = "index.html"

# references.csv에서 canonical reference를 담은 행의 prefix
REFERENCE_ROW_PREFIX = "reference,"

# =============================================================================
# Outputs (출력)
# =============================================================================
# <outDir>/
# ├── index.html
# ├── review/<pattern>.html
# └── logs/build_<run_id>.json (선택)

REVIEW_DIRNAME = "review"
INDEX_OUTPUT_FILENAME = "index.html"
LOGS_DIRNAME = "logs"
OUTPUT_LOCK_FILENAME = ".at-review.lock"

REVIEW_TEMPLATE_NAME = "review.html.j2"
REVIEW_INDEX_TEMPLATE_NAME = "review_index.html.j2"

# =============================================================================
# Applicability (적용 대상 AT)
# =============================================================================
# applies_to 첫 요소가 아래 문구 중 하나면 레지스트리의 모든 AT

DEFAULT_SCREEN_READER_SENTINELS = (
    "desktop screen readers",
    "screen readers",
)

# =============================================================================
# Assertion Priority (우선순위 코드 → 라벨)
# =============================================================================

PRIORITY_LABELS = {
    1: "required",
    2: "optional",
}

# =============================================================================
# Help Links
# =============================================================================

ARIA_SPEC_LABEL = "ARIA specification"
APG_EXAMPLE_LABEL = "APG example"
APG_EXAMPLES_SEGMENT = "examples/"

# =============================================================================
# Commands
# =============================================================================

COMMAND_SEQUENCE_JOINER = ", then "

RUN_ID_PREFIX = "RUN-"
