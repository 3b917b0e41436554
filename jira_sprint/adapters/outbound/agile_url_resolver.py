_AGILE_API_PREFIX = "/rest/agile"


class AgileUrlResolver:
    """Jira Agile REST API 상대 경로를 절대 URL로 변환하는 Outbound Adapter"""

    def __init__(self, base_url: str, api_version: str = "1.0"):
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version.strip("/")

    def resolve(self, relative_path: str) -> str:
        """예: '/sprint/42' → 'https://jira.example.com/rest/agile/1.0/sprint/42'"""
        if not relative_path.startswith("/"):
            raise ValueError(f"상대 경로는 '/'로 시작해야 합니다: {relative_path!r}")
        return f"{self.base_url}{_AGILE_API_PREFIX}/{self.api_version}{relative_path}"
