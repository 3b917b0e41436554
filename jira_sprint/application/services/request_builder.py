import copy
from collections.abc import Mapping
from dataclasses import asdict
from typing import Any
from urllib.parse import quote

from jira_sprint.application.ports.url_resolver_port import UrlResolverPort
from jira_sprint.domain.errors import SprintRequestError
from jira_sprint.domain.sprint import (
    CreateSprintParams,
    DeleteSprintParams,
    GetSprintIssuesParams,
    GetSprintParams,
    HttpMethod,
    MoveSprintIssuesParams,
    PartialUpdateSprintParams,
    RequestDescriptor,
    SwapSprintParams,
    UpdateSprintParams,
    freeze_options,
)

_SPRINT_PATH = "/sprint"


def _coerce(params_type, options):
    """options mapping이면 파라미터 레코드로 변환하고, (params, raw_options)를 반환합니다."""
    if isinstance(options, params_type):
        return options, freeze_options(asdict(options))
    if not isinstance(options, Mapping):
        raise SprintRequestError(f"{params_type.__name__} 또는 mapping이 필요합니다: {type(options).__name__}")
    return params_type.from_options(options), freeze_options(options)


def _detached(fields: Mapping[str, Any]) -> dict[str, Any]:
    """본문용 깊은 사본. 호출자 payload의 중첩 값과 공유하지 않습니다."""
    return copy.deepcopy(dict(fields))


class SprintRequestBuilder:
    """
    스프린트 작업별 옵션을 RequestDescriptor로 변환합니다.

    - 경로/쿼리/본문 필드 분배만 담당 (I/O, 재시도, 의미 검증 없음)
    - 값이 없는 쿼리 필드도 키는 유지하고 None으로 전달 (제거는 Transport 담당)
    - URL은 항상 UrlResolverPort를 거쳐 생성
    """

    def __init__(self, url_resolver: UrlResolverPort):
        self.url_resolver = url_resolver

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create_sprint(self, options: CreateSprintParams | Mapping[str, Any]) -> RequestDescriptor:
        params, raw = _coerce(CreateSprintParams, options)
        return RequestDescriptor(
            url=self.url_resolver.resolve(_SPRINT_PATH),
            method=HttpMethod.POST,
            body=_detached(params.data),
            raw_options=raw,
        )

    def get_sprint(self, options: GetSprintParams | Mapping[str, Any]) -> RequestDescriptor:
        params, raw = _coerce(GetSprintParams, options)
        return RequestDescriptor(
            url=self._sprint_url(params.sprint_id),
            method=HttpMethod.GET,
            query=self._paging_query(params),
            raw_options=raw,
        )

    def update_sprint(self, options: UpdateSprintParams | Mapping[str, Any]) -> RequestDescriptor:
        params, raw = _coerce(UpdateSprintParams, options)
        return RequestDescriptor(
            url=self._sprint_url(params.sprint_id),
            method=HttpMethod.PUT,
            body=_detached(params.fields),
            raw_options=raw,
        )

    def partially_update_sprint(
        self,
        options: PartialUpdateSprintParams | Mapping[str, Any],
    ) -> RequestDescriptor:
        params, raw = _coerce(PartialUpdateSprintParams, options)
        return RequestDescriptor(
            url=self._sprint_url(params.sprint_id),
            method=HttpMethod.POST,
            body=_detached(params.fields),
            raw_options=raw,
        )

    def delete_sprint(self, options: DeleteSprintParams | Mapping[str, Any]) -> RequestDescriptor:
        params, raw = _coerce(DeleteSprintParams, options)
        return RequestDescriptor(
            url=self._sprint_url(params.sprint_id),
            method=HttpMethod.DELETE,
            query=self._paging_query(params),
            raw_options=raw,
        )

    def get_sprint_issues(
        self,
        options: GetSprintIssuesParams | Mapping[str, Any],
    ) -> RequestDescriptor:
        params, raw = _coerce(GetSprintIssuesParams, options)
        return RequestDescriptor(
            url=self._sprint_url(params.sprint_id, "/issue"),
            method=HttpMethod.GET,
            query={
                "startAt": params.start_at,
                "maxResults": params.max_results,
                "jql": params.jql,
                "validateQuery": params.validate_query,
                "fields": params.fields,
                "expand": params.expand,
            },
            raw_options=raw,
        )

    def move_sprint_issues(
        self,
        options: MoveSprintIssuesParams | Mapping[str, Any],
    ) -> RequestDescriptor:
        params, raw = _coerce(MoveSprintIssuesParams, options)
        return RequestDescriptor(
            url=self._sprint_url(params.sprint_id, "/issue"),
            method=HttpMethod.POST,
            body=_detached(params.fields),
            raw_options=raw,
        )

    def swap_sprint(self, options: SwapSprintParams | Mapping[str, Any]) -> RequestDescriptor:
        params, raw = _coerce(SwapSprintParams, options)
        return RequestDescriptor(
            url=self._sprint_url(params.sprint_id, "/swap"),
            method=HttpMethod.POST,
            body=_detached(params.fields),
            raw_options=raw,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _sprint_url(self, sprint_id: Any, suffix: str = "") -> str:
        """
        스프린트 경로 URL을 만듭니다.

        식별자는 str() 후 단일 경로 세그먼트로 percent-encoding 합니다.
        숫자나 영숫자 ID는 그대로 들어가지만, '/', 공백, '%' 등이 포함된 문자열 ID는
        인코딩됩니다 (예: 'a%20b' → 'a%2520b'). 이미 인코딩된 ID를 넘기면 안 됩니다.
        """
        segment = quote(str(sprint_id), safe="")
        return self.url_resolver.resolve(f"{_SPRINT_PATH}/{segment}{suffix}")

    @staticmethod
    def _paging_query(params: GetSprintParams) -> dict[str, Any]:
        return {
            "filter": params.filter,
            "startAt": params.start_at,
            "maxResults": params.max_results,
        }
