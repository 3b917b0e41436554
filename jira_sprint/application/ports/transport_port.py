from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from jira_sprint.domain.sprint import RequestDescriptor

# callback(error, result) 형태. 코루틴 함수도 허용
CompletionCallback = Callable[[BaseException | None, Any], Awaitable[None] | None]


class TransportPort(Protocol):
    """요청 descriptor를 실제 HTTP 호출로 수행하는 Port"""

    async def execute(
        self,
        descriptor: RequestDescriptor,
        callback: CompletionCallback | None = None,
    ) -> Any:
        """
        요청을 한 번 수행하고 결과를 반환합니다.

        callback이 주어지면 반환값(또는 예외)과 동일한 결과로 호출됩니다.
        """
        ...
