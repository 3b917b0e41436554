import logging
from collections.abc import Mapping
from typing import Any

from jira_sprint.application.ports.transport_port import CompletionCallback, TransportPort
from jira_sprint.application.services.completion import notify_completion
from jira_sprint.application.services.request_builder import SprintRequestBuilder
from jira_sprint.domain.sprint import RequestDescriptor

logger = logging.getLogger(__name__)


class SprintOperationUseCase:
    """스프린트 작업 Use Case 공통 흐름: descriptor 생성 → Transport 1회 호출"""

    operation = ""

    def __init__(self, request_builder: SprintRequestBuilder, transport: TransportPort):
        self.request_builder = request_builder
        self.transport = transport

    async def execute(
        self,
        options: Mapping[str, Any] | Any,
        callback: CompletionCallback | None = None,
    ) -> Any:
        """
        작업을 실행하고 Transport 결과를 반환합니다.

        Args:
            options: 작업 옵션 mapping 또는 작업별 파라미터 레코드
            callback: (error, result)로 호출되는 완료 callback (선택)

        Returns:
            Jira API 응답 (JSON). 본문이 없는 응답이면 None
        """
        logger.info("📋 %s 실행 시작", self.operation)

        try:
            descriptor = self._build(options)
        except Exception as e:
            logger.error("❌ 요청 생성 실패 (%s): %s", self.operation, e)
            await notify_completion(callback, e, None)
            raise

        logger.info("요청: %s %s", descriptor.method.value, descriptor.url)
        result = await self.transport.execute(descriptor, callback)

        logger.info("✅ %s 실행 완료", self.operation)
        return result

    def _build(self, options) -> RequestDescriptor:
        raise NotImplementedError
