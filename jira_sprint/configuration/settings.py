import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    app_env = os.getenv("APP_ENV", "local")
    # 프로젝트 루트 디렉토리 찾기 (jira_sprint/configuration/settings.py -> ../../)
    project_root = Path(__file__).parent.parent.parent
    env_file = project_root / f".env.{app_env}"
    load_dotenv(env_file)


@dataclass(frozen=True)
class Settings:
    app_env: str
    server_name: str
    jira_base_url: str
    user_id: str
    user_password: str
    agile_api_version: str  # /rest/agile/{버전}
    http_timeout: float     # Jira API 호출 timeout (초)


def build_settings() -> Settings:
    _load_env()

    required_vars = ("APP_ENV", "SERVER_NAME", "JIRA_BASE_URL", "USER_ID", "USER_PASSWORD")
    missing = [k for k in required_vars if not os.getenv(k)]
    if missing:
        raise RuntimeError(f"필수 환경 변수 누락: {', '.join(missing)}")

    try:
        http_timeout = float(os.getenv("HTTP_TIMEOUT", "30"))
    except ValueError as e:
        raise RuntimeError(f"HTTP_TIMEOUT 값이 숫자가 아닙니다: {os.getenv('HTTP_TIMEOUT')}") from e

    return Settings(
        app_env=os.environ["APP_ENV"],
        server_name=os.environ["SERVER_NAME"],
        jira_base_url=os.environ["JIRA_BASE_URL"],
        user_id=os.environ["USER_ID"],
        user_password=os.environ["USER_PASSWORD"],
        agile_api_version=os.getenv("JIRA_AGILE_API_VERSION", "1.0"),
        http_timeout=http_timeout,
    )
