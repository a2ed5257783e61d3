"""
Command Resolution Adapter: (mode, task, AT) → 명령 목록 + mode 안내문.

인터페이스(CommandResolver)만 파이프라인에 주입되고,
기본 구현(CommandsTable)은 패턴별 commands.json을 읽음.

commands.json 구조:
    {task: {mode: {at_key: [[key_sequence, further_instruction?], ...]}}}

- key_sequence: 쉼표로 구분된 키 식별자 ("down,down")
- 키 식별자 → 표시 라벨: keys.yaml 테이블 (없으면 식별자 그대로)
- 데이터 없음(task/mode/AT 누락, 빈 목록) → NoCommandData (허용 gap)
- 테이블에 없는 키 식별자 → ReviewBuildError (입력 오류)
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

import yaml

from at_review.domain.constants import COMMAND_SEQUENCE_JOINER
from at_review.domain.errors import ErrorCodes, NoCommandData, ReviewBuildError
from at_review.domain.schemas import AssistiveTechnology


class CommandResolver(Protocol):
    """assembler가 의존하는 command resolution 경계."""

    def get_at_commands(
        self, mode: str, task: str, at: AssistiveTechnology
    ) -> list[str]:
        """명령 목록. 데이터가 없으면 NoCommandData."""
        ...

    def get_mode_instructions(self, mode: str, at: AssistiveTechnology) -> str:
        """mode 안내문. 항상 값 반환 (빈 문자열 가능)."""
        ...


def load_key_labels(keys_path: Path) -> dict[str, str]:
    """
    keys.yaml 로드.

    형식: {keys: {identifier: label}} 또는 {identifier: label}

    Args:
        keys_path: keys.yaml 경로

    Returns:
        식별자 → 라벨 (파일 없으면 빈 dict)
    """
    if not keys_path.exists():
        return {}

    with open(keys_path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    table = data.get("keys", data)
    return {str(k): str(v) for k, v in table.items()}


def load_commands_json(commands_path: Path) -> dict[str, Any]:
    """
    패턴의 commands.json 로드.

    Raises:
        ReviewBuildError: FILE_MISSING, COMMANDS_FILE_CORRUPT
    """
    if not commands_path.exists():
        raise ReviewBuildError(ErrorCodes.FILE_MISSING, path=str(commands_path))

    try:
        data = json.loads(commands_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ReviewBuildError(
            ErrorCodes.COMMANDS_FILE_CORRUPT,
            path=str(commands_path),
            error=str(e),
        ) from e

    if not isinstance(data, dict):
        raise ReviewBuildError(
            ErrorCodes.COMMANDS_FILE_CORRUPT,
            path=str(commands_path),
            error="top-level value must be an object",
        )
    return data


class CommandsTable:
    """
    commands.json 기반 기본 CommandResolver.

    Usage:
        resolver = CommandsTable(commands, mode_instructions, key_labels)
        resolver.get_at_commands("reading", "navigate to checkbox", at)
    """

    def __init__(
        self,
        commands: Mapping[str, Any],
        mode_instructions: Mapping[str, Mapping[str, str]] | None = None,
        key_labels: Mapping[str, str] | None = None,
    ) -> None:
        self.commands = commands
        self.mode_instructions = mode_instructions or {}
        self.key_labels = key_labels or {}

    def get_at_commands(
        self, mode: str, task: str, at: AssistiveTechnology
    ) -> list[str]:
        """
        (mode, task, AT) 명령 목록.

        Returns:
            명령 문자열 목록 (예: ["Down Arrow, then Down Arrow"])

        Raises:
            NoCommandData: task/mode/AT 데이터 없음 또는 빈 목록
            ReviewBuildError: UNKNOWN_KEY_IDENTIFIER
        """
        by_mode = self.commands.get(task)
        if not isinstance(by_mode, Mapping):
            raise NoCommandData(mode, task, at.key)

        by_at = by_mode.get(mode)
        if not isinstance(by_at, Mapping):
            raise NoCommandData(mode, task, at.key)

        entries = by_at.get(at.key) or []
        if not entries:
            raise NoCommandData(mode, task, at.key)

        return [self._format_entry(entry, mode, task, at) for entry in entries]

    def _format_entry(
        self,
        entry: Any,
        mode: str,
        task: str,
        at: AssistiveTechnology,
    ) -> str:
        """[key_sequence, further_instruction?] → 명령 문자열."""
        if isinstance(entry, str):
            entry = [entry]

        sequence = str(entry[0])
        further = entry[1] if len(entry) > 1 else None

        parts = []
        for identifier in sequence.split(","):
            label = self._label_for(identifier.strip(), mode, task, at)
            parts.append(f"{label} {further}" if further else label)

        return COMMAND_SEQUENCE_JOINER.join(parts)

    def _label_for(
        self,
        identifier: str,
        mode: str,
        task: str,
        at: AssistiveTechnology,
    ) -> str:
        if not self.key_labels:
            return identifier

        label = self.key_labels.get(identifier)
        if label is None:
            raise ReviewBuildError(
                ErrorCodes.UNKNOWN_KEY_IDENTIFIER,
                identifier=identifier,
                at=at.name,
                mode=mode,
                task=task,
            )
        return label

    def get_mode_instructions(self, mode: str, at: AssistiveTechnology) -> str:
        """support.json modeInstructions[mode][at_key], 없으면 ""."""
        by_at = self.mode_instructions.get(mode) or {}
        return str(by_at.get(at.key, ""))
