import asyncio
import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path

from mcp.server import Server
from mcp.server.stdio import stdio_server

from jira_sprint.adapters.inbound.mcp.tools import register_tools
from jira_sprint.configuration.container import build_container, clear_container

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
_LOG_BACKUP_COUNT = 5


def setup_logging(log_dir: Path | None = None, level: int = logging.INFO) -> None:
    """
    로깅 설정: stderr와 파일 두 곳에 로그 출력

    stdout은 MCP stdio 프로토콜이 사용하므로 로그는 stderr로만 보냅니다.
    """
    log_dir = log_dir or Path(__file__).parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 재호출 시 핸들러 중복 방지
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    file_handler = RotatingFileHandler(
        log_dir / "mcp-server.log",
        maxBytes=_LOG_MAX_BYTES,
        backupCount=_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)


async def main() -> None:
    try:
        logger.info("=" * 60)
        logger.info("Jira Sprint MCP 서버 초기화 시작")

        container = build_container()
        settings = container.settings
        logger.info("✅ Container 빌드 완료")
        logger.info("서버 이름: %s", settings.server_name)
        logger.info("환경: %s", settings.app_env)
        logger.info("Jira URL: %s", settings.jira_base_url)
        logger.info("Agile API 버전: %s", settings.agile_api_version)
        logger.info("Jira User: %s", settings.user_id)

        app = Server(settings.server_name)
        register_tools(app)
        logger.info("✅ MCP Tools 등록 완료")
        logger.info("=" * 60)

        try:
            async with stdio_server() as (read_stream, write_stream):
                await app.run(read_stream, write_stream, app.create_initialization_options())
        finally:
            if settings.app_env == "local":
                clear_container()
            logger.info("MCP 서버 종료")

    except Exception as e:
        logger.error("=" * 60)
        logger.error("MCP 서버 시작 실패!")
        logger.error("오류 타입: %s", type(e).__name__)
        logger.error("오류 메시지: %s", str(e))
        logger.error("=" * 60)
        traceback.print_exc(file=sys.stderr)
        raise


def run() -> None:
    """콘솔 스크립트 진입점 (jira-sprint-mcp)"""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    setup_logging(level=getattr(logging, level_name, logging.INFO))
    asyncio.run(main())


if __name__ == "__main__":
    run()
