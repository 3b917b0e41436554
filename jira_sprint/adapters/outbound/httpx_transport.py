import logging
from collections.abc import Mapping
from typing import Any

import httpx

from jira_sprint.application.ports.transport_port import CompletionCallback
from jira_sprint.application.services.completion import notify_completion
from jira_sprint.domain.errors import JiraTransportError
from jira_sprint.domain.sprint import HttpMethod, RequestDescriptor

logger = logging.getLogger(__name__)

# 본문이 비어 있어도 JSON 본문을 보내는 메서드
_BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT})

_ERROR_TEXT_LIMIT = 500


def clean_query(query: Mapping[str, Any]) -> dict[str, str]:
    """
    쿼리 파라미터를 전송 형태로 정리합니다.

    - 값이 None인 키는 제거
    - list/tuple 값은 콤마로 연결 (fields, expand 등)
    - bool 값은 'true'/'false'
    """
    cleaned: dict[str, str] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            cleaned[key] = ",".join(str(v) for v in value)
        else:
            cleaned[key] = str(value)
    return cleaned


class HttpxTransport:
    """RequestDescriptor를 httpx로 실행하는 Outbound Adapter (Transport)"""

    def __init__(
        self,
        user: str,
        password: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.user = user
        self.password = password
        self.timeout = timeout
        # 테스트에서 httpx.MockTransport 주입용
        self._transport = transport

    # ------------------------------------------------------------------
    # Public methods
    # ------------------------------------------------------------------

    async def execute(
        self,
        descriptor: RequestDescriptor,
        callback: CompletionCallback | None = None,
    ) -> Any:
        """
        요청을 한 번 수행하고, 결과를 반환값과 callback 양쪽에 동일하게 전달합니다.

        - 성공: callback(None, result) 후 result 반환
        - 실패: callback(error, None) 후 error 재발생
        """
        try:
            result = await self._send(descriptor)
        except Exception as e:
            await notify_completion(callback, e, None)
            raise

        await notify_completion(callback, None, result)
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """auth, timeout, redirect 설정이 된 httpx.AsyncClient를 반환합니다."""
        return httpx.AsyncClient(
            auth=(self.user, self.password) if self.user else None,
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )

    async def _send(self, descriptor: RequestDescriptor) -> Any:
        """공통 HTTP 요청. JSON 응답 또는 None 반환."""
        method = descriptor.method.value
        kwargs: dict[str, Any] = {"params": clean_query(descriptor.query)}
        if descriptor.body or descriptor.method in _BODY_METHODS:
            kwargs["json"] = descriptor.body

        logger.info("🌐 Jira Agile API 호출: %s %s", method, descriptor.url)
        if kwargs["params"]:
            logger.info("Query: %s", kwargs["params"])

        try:
            async with self._client() as client:
                response = await client.request(method, descriptor.url, **kwargs)
                logger.info("HTTP Status: %d", response.status_code)
                response.raise_for_status()
                return self._parse_body(response)
        except httpx.HTTPStatusError as e:
            logger.error("❌ HTTP 오류 발생: %d", e.response.status_code)
            logger.error("응답 본문: %s", e.response.text[:_ERROR_TEXT_LIMIT])
            self._raise_jira_error(e)
        except httpx.TransportError as e:
            logger.error("❌ 네트워크 오류: %s", str(e))
            raise JiraTransportError(f"Jira 서버 연결 실패: {descriptor.url}") from e

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        """204 또는 빈 본문이면 None, 그 외에는 JSON을 반환합니다."""
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise JiraTransportError(
                "Jira 응답을 JSON으로 해석할 수 없습니다",
                status_code=response.status_code,
                response_text=response.text[:_ERROR_TEXT_LIMIT],
            ) from e

    @staticmethod
    def _raise_jira_error(e: httpx.HTTPStatusError) -> None:
        """HTTP 상태 코드별 적절한 JiraTransportError를 발생시킵니다."""
        status = e.response.status_code
        text = e.response.text[:_ERROR_TEXT_LIMIT]
        if status == 400:
            message = f"잘못된 요청입니다: {text[:200]}"
        elif status == 401:
            message = "Jira 인증 실패: 사용자명 또는 비밀번호를 확인하세요"
        elif status == 403:
            message = "Jira 접근 권한이 없습니다"
        elif status == 404:
            message = "스프린트를 찾을 수 없습니다"
        else:
            message = f"Jira API 오류: {status}"
        raise JiraTransportError(message, status_code=status, response_text=text) from e
