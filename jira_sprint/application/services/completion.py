import inspect
import logging
from typing import Any

from jira_sprint.application.ports.transport_port import CompletionCallback

logger = logging.getLogger(__name__)


async def notify_completion(
    callback: CompletionCallback | None,
    error: BaseException | None,
    result: Any,
) -> None:
    """
    완료 callback이 있으면 (error, result)로 호출합니다. 코루틴이면 await 합니다.

    callback 내부 예외는 로그만 남기고 전파하지 않습니다.
    호출자가 받는 결과(반환값 또는 원래 예외)는 callback과 항상 같아야 합니다.
    """
    if callback is None:
        return

    logger.debug("완료 callback 호출: error=%s", type(error).__name__ if error else None)
    try:
        outcome = callback(error, result)
        if inspect.isawaitable(outcome):
            await outcome
    except Exception:
        logger.exception("❌ 완료 callback 실행 중 예외 발생 (결과에는 영향 없음)")
