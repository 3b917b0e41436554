import json
import logging
import sys
import traceback
from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from jira_sprint.configuration.container import Container, build_container

logger = logging.getLogger(__name__)

# 로그에서 축약할 필드 (긴 JQL 등)
_LONG_TEXT_FIELDS = {"jql", "goal"}
_LONG_TEXT_LIMIT = 40

# 목록 출력 시 최대 이슈 수
_MAX_LISTED_ISSUES = 50

_SPRINT_ID_PROPERTY = {
    "type": ["integer", "string"],
    "description": "스프린트 ID (예: 331)",
}

_PAGING_PROPERTIES = {
    "startAt": {"type": "integer", "description": "조회 시작 인덱스 (0부터)"},
    "maxResults": {"type": "integer", "description": "최대 조회 건수"},
}

_SPRINT_FIELD_PROPERTIES = {
    "name": {"type": "string", "description": "스프린트 이름"},
    "state": {"type": "string", "description": "스프린트 상태 (future, active, closed)"},
    "startDate": {"type": "string", "description": "시작일시 (ISO 8601)"},
    "endDate": {"type": "string", "description": "종료일시 (ISO 8601)"},
    "completeDate": {"type": "string", "description": "완료일시 (ISO 8601)"},
    "goal": {"type": "string", "description": "스프린트 목표"},
}


def _tool(name: str, description: str, properties: dict, required: list[str] | None = None) -> Tool:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return Tool(name=name, description=description, inputSchema=schema)


SPRINT_TOOLS: list[Tool] = [
    _tool(
        "create_sprint",
        "새 스프린트를 생성합니다. (POST /rest/agile/1.0/sprint)",
        {
            **_SPRINT_FIELD_PROPERTIES,
            "originBoardId": {"type": "integer", "description": "스프린트를 생성할 보드 ID"},
        },
        required=["name", "originBoardId"],
    ),
    _tool(
        "get_sprint",
        "스프린트 단건을 조회합니다.",
        {
            "sprintId": _SPRINT_ID_PROPERTY,
            "filter": {"type": "string", "description": "필터"},
            **_PAGING_PROPERTIES,
        },
        required=["sprintId"],
    ),
    _tool(
        "update_sprint",
        "스프린트 전체 수정 (PUT). 전달하지 않은 필드는 Jira에서 초기화될 수 있습니다.",
        {"sprintId": _SPRINT_ID_PROPERTY, **_SPRINT_FIELD_PROPERTIES},
        required=["sprintId"],
    ),
    _tool(
        "partially_update_sprint",
        "스프린트 부분 수정 (POST). 전달한 필드만 변경됩니다.",
        {"sprintId": _SPRINT_ID_PROPERTY, **_SPRINT_FIELD_PROPERTIES},
        required=["sprintId"],
    ),
    _tool(
        "delete_sprint",
        "스프린트를 삭제합니다. future 상태의 스프린트만 삭제할 수 있습니다.",
        {"sprintId": _SPRINT_ID_PROPERTY},
        required=["sprintId"],
    ),
    _tool(
        "get_sprint_issues",
        "스프린트에 포함된 이슈 목록을 조회합니다.",
        {
            "sprintId": _SPRINT_ID_PROPERTY,
            **_PAGING_PROPERTIES,
            "jql": {"type": "string", "description": "결과를 추가로 필터링할 JQL"},
            "validateQuery": {"type": "boolean", "description": "JQL 검증 여부"},
            "fields": {
                "type": "array",
                "items": {"type": "string"},
                "description": "이슈별로 반환할 필드 목록 (예: ['summary', 'status'])",
            },
            "expand": {"type": "string", "description": "확장할 파라미터 (콤마 구분)"},
        },
        required=["sprintId"],
    ),
    _tool(
        "move_sprint_issues",
        "이슈를 스프린트로 이동합니다. 한 번에 최대 50건까지 이동할 수 있습니다.",
        {
            "sprintId": _SPRINT_ID_PROPERTY,
            "issues": {
                "type": "array",
                "items": {"type": "string"},
                "description": "이동할 이슈 키 목록 (예: ['PROJ-1', 'PROJ-2'])",
            },
            "rankBeforeIssue": {"type": "string", "description": "이 이슈 앞에 순위 지정"},
            "rankAfterIssue": {"type": "string", "description": "이 이슈 뒤에 순위 지정"},
            "rankCustomFieldId": {"type": "integer", "description": "순위 커스텀 필드 ID"},
        },
        required=["sprintId", "issues"],
    ),
    _tool(
        "swap_sprint",
        "두 스프린트의 순서를 서로 바꿉니다.",
        {
            "sprintId": _SPRINT_ID_PROPERTY,
            "sprintToSwapWith": {"type": "integer", "description": "순서를 바꿀 상대 스프린트 ID"},
        },
        required=["sprintId", "sprintToSwapWith"],
    ),
]

SPRINT_TOOL_NAMES = frozenset(tool.name for tool in SPRINT_TOOLS)


def mask_arguments(arguments: dict) -> dict:
    """로깅용으로 긴 텍스트 필드를 축약합니다."""
    masked = {}
    for key, value in arguments.items():
        if key in _LONG_TEXT_FIELDS and isinstance(value, str) and len(value) > _LONG_TEXT_LIMIT:
            masked[key] = f"{value[:_LONG_TEXT_LIMIT]}... ({len(value)}자)"
        else:
            masked[key] = value
    return masked


def format_result(name: str, result: Any) -> str:
    """Use Case 결과를 마크다운 텍스트로 변환합니다."""
    if result is None:
        return f"# ✅ {name} 완료\n\n응답 본문 없음 (HTTP 204)"

    formatted_text = f"# ✅ {name} 결과\n\n"

    if name == "get_sprint_issues" and isinstance(result, dict):
        issues = result.get("issues", [])
        formatted_text += f"**총 {result.get('total', len(issues))}건**\n\n"
        for i, issue in enumerate(issues[:_MAX_LISTED_ISSUES], 1):
            fields = issue.get("fields") or {}
            status = (fields.get("status") or {}).get("name", "")
            formatted_text += f"{i}. **{issue.get('key', '')}** {fields.get('summary', '')}"
            formatted_text += f" [{status}]\n" if status else "\n"
        if len(issues) > _MAX_LISTED_ISSUES:
            formatted_text += f"\n... 외 {len(issues) - _MAX_LISTED_ISSUES}건\n"
        return formatted_text

    formatted_text += "```json\n"
    formatted_text += json.dumps(result, ensure_ascii=False, indent=2)
    formatted_text += "\n```\n"
    return formatted_text


def format_error(name: str, error: Exception) -> str:
    return f"""# ❌ 오류 발생

**Tool:** {name}
**오류 타입:** {type(error).__name__}
**오류 메시지:** {str(error)}

자세한 내용은 서버 로그를 확인하세요.
"""


def _use_case_for(container: Container, name: str):
    return getattr(container, f"{name}_use_case")


def register_tools(app: Server) -> None:
    """MCP Tool 핸들러를 서버에 등록합니다."""

    @app.call_tool()
    async def call_tool(name: str, arguments: dict):
        try:
            container = build_container()
            logger.info("=" * 60)
            logger.info("🔧 Tool 호출: %s", name)
            logger.info("인자: %s", mask_arguments(arguments or {}))
            logger.info("환경: %s", container.settings.app_env)
            logger.info("=" * 60)

            if name not in SPRINT_TOOL_NAMES:
                raise ValueError(f"알 수 없는 tool: {name}")

            result = await _use_case_for(container, name).execute(dict(arguments or {}))
            logger.info("✅ Tool 실행 완료: %s", name)

            return [TextContent(type="text", text=format_result(name, result))]

        except Exception as e:
            logger.error("=" * 60)
            logger.error("❌ Tool 실행 실패!")
            logger.error("Tool: %s", name)
            logger.error("오류 타입: %s", type(e).__name__)
            logger.error("오류 메시지: %s", str(e))
            logger.error("=" * 60)
            traceback.print_exc(file=sys.stderr)

            return [TextContent(type="text", text=format_error(name, e))]

    @app.list_tools()
    async def list_tools():
        return SPRINT_TOOLS
