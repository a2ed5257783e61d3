"""
Configuration: default.yaml 로드 + 기본값 병합.
"""

import copy
from pathlib import Path
from typing import Any

import yaml

from at_review.domain.constants import DEFAULT_SCREEN_READER_SENTINELS, RESOURCES_DIRNAME

DEFAULT_CONFIG: dict[str, Any] = {
    "paths": {
        "tests_dir": "tests",
        "review_dir": "review",
        "skip_dirs": [RESOURCES_DIRNAME],
    },
    "review": {
        "sort_tests": True,
        "screen_reader_sentinels": list(DEFAULT_SCREEN_READER_SENTINELS),
    },
    "git": {
        "enabled": True,
    },
    "output": {
        "lock_timeout": 10.0,
        "save_build_log": False,
    },
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """섹션 단위 재귀 병합 (override 우선)."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    설정 파일 로드.

    Args:
        config_path: YAML 경로 (기본: 프로젝트 루트의 default.yaml)

    Returns:
        기본값과 병합된 설정 (파일 없으면 기본값)
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent / "default.yaml"

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}

    return _merge(DEFAULT_CONFIG, data)
