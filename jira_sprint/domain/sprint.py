import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from jira_sprint.domain.errors import SprintRequestError

# 경로에 들어가는 스프린트 식별자 키 (Jira Agile API 필드명)
SPRINT_ID_KEY = "sprintId"

# 쓰기 요청에서 payload를 담는 공통 키
DATA_KEY = "data"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class RequestDescriptor:
    """Transport에 전달되는 완성된 요청 명세"""
    url: str
    method: HttpMethod
    query: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    raw_options: Mapping[str, Any] = field(default_factory=dict)  # 읽기 전용 사본


def freeze_options(options: Mapping[str, Any]) -> Mapping[str, Any]:
    """호출자 옵션의 깊은 사본을 읽기 전용 mapping으로 반환합니다."""
    return MappingProxyType(copy.deepcopy(dict(options)))


def split_identifier(
    payload: Mapping[str, Any],
    key: str = SPRINT_ID_KEY,
) -> tuple[Any, dict[str, Any]]:
    """
    payload에서 식별자를 분리합니다.

    원본 payload는 변경하지 않고, 식별자를 제외한 새 dict를 반환합니다.

    Returns:
        (identifier, remaining_fields) 튜플. 식별자가 없으면 identifier는 None
    """
    remaining = {k: v for k, v in payload.items() if k != key}
    return payload.get(key), remaining


def resolve_payload(options: Mapping[str, Any], alias: str | None = None) -> Mapping[str, Any]:
    """
    쓰기 요청의 payload를 찾습니다.

    우선순위: options["data"] → options[alias] → options 자체
    """
    if DATA_KEY in options:
        payload = options[DATA_KEY]
    elif alias and alias in options:
        payload = options[alias]
    else:
        payload = options

    if not isinstance(payload, Mapping):
        raise SprintRequestError(f"payload는 object 형식이어야 합니다: {type(payload).__name__}")
    return payload


def _require_sprint_id(sprint_id: Any, operation: str) -> None:
    if sprint_id is None or (isinstance(sprint_id, str) and not sprint_id.strip()):
        raise SprintRequestError(f"{operation}: {SPRINT_ID_KEY} 값이 필요합니다")


@dataclass(frozen=True)
class CreateSprintParams:
    data: Mapping[str, Any]

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "CreateSprintParams":
        return cls(data=dict(resolve_payload(options)))


@dataclass(frozen=True)
class GetSprintParams:
    sprint_id: Any
    filter: str | None = None
    start_at: int | None = None
    max_results: int | None = None

    def __post_init__(self):
        _require_sprint_id(self.sprint_id, "get_sprint")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "GetSprintParams":
        return cls(
            sprint_id=options.get(SPRINT_ID_KEY),
            filter=options.get("filter"),
            start_at=options.get("startAt"),
            max_results=options.get("maxResults"),
        )


@dataclass(frozen=True)
class DeleteSprintParams(GetSprintParams):

    def __post_init__(self):
        _require_sprint_id(self.sprint_id, "delete_sprint")


@dataclass(frozen=True)
class GetSprintIssuesParams:
    sprint_id: Any
    start_at: int | None = None
    max_results: int | None = None
    jql: str | None = None
    validate_query: bool | None = None
    fields: str | list[str] | None = None
    expand: str | None = None

    def __post_init__(self):
        _require_sprint_id(self.sprint_id, "get_sprint_issues")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "GetSprintIssuesParams":
        return cls(
            sprint_id=options.get(SPRINT_ID_KEY),
            start_at=options.get("startAt"),
            max_results=options.get("maxResults"),
            jql=options.get("jql"),
            validate_query=options.get("validateQuery"),
            fields=options.get("fields"),
            expand=options.get("expand"),
        )


@dataclass(frozen=True)
class _SprintPayloadParams:
    """식별자가 payload 안에 들어오는 쓰기 요청의 공통 형태"""
    sprint_id: Any
    fields: Mapping[str, Any] = field(default_factory=dict)

    # from_options에서 payload를 찾을 때 사용할 별칭 키
    payload_alias = None
    operation = "sprint"

    def __post_init__(self):
        _require_sprint_id(self.sprint_id, self.operation)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]):
        payload = resolve_payload(options, cls.payload_alias)
        sprint_id, remaining = split_identifier(payload)
        return cls(sprint_id=sprint_id, fields=remaining)


@dataclass(frozen=True)
class UpdateSprintParams(_SprintPayloadParams):
    payload_alias = "sprint"
    operation = "update_sprint"


@dataclass(frozen=True)
class PartialUpdateSprintParams(_SprintPayloadParams):
    payload_alias = "sprint"
    operation = "partially_update_sprint"


@dataclass(frozen=True)
class MoveSprintIssuesParams(_SprintPayloadParams):
    operation = "move_sprint_issues"

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "MoveSprintIssuesParams":
        # options 자체가 본문: data 키도 본문 필드로 그대로 전달
        sprint_id, remaining = split_identifier(options)
        return cls(sprint_id=sprint_id, fields=remaining)


@dataclass(frozen=True)
class SwapSprintParams(_SprintPayloadParams):
    payload_alias = "swapped"
    operation = "swap_sprint"
