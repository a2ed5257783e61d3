"""
Core layer: 테스트 레코드 해석 파이프라인.

역할:
- AT 레지스트리, applicability 해석, assertion 병합
- command resolution 경계, 레코드 조립, version-control 경계
"""

from .applicability import parse_applicability, resolve_applicable_ats
from .assembler import TestRecordAssembler, classify_help_link, normalize_mode
from .assertions import merge_assertions, priority_label
from .commands import CommandResolver, CommandsTable
from .git_meta import GitMetadata, NullGitMetadata
from .logging import create_build_log, emit_warning, save_build_log
from .registry import ATRegistry

__all__ = [
    # registry
    "ATRegistry",
    # applicability
    "parse_applicability",
    "resolve_applicable_ats",
    # assertions
    "merge_assertions",
    "priority_label",
    # commands
    "CommandResolver",
    "CommandsTable",
    # assembler
    "TestRecordAssembler",
    "classify_help_link",
    "normalize_mode",
    # git
    "GitMetadata",
    "NullGitMetadata",
    # logging
    "create_build_log",
    "emit_warning",
    "save_build_log",
]
