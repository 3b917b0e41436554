from typing import Protocol


class UrlResolverPort(Protocol):
    """Agile API 상대 경로를 절대 URL로 변환하는 Port"""

    def resolve(self, relative_path: str) -> str:
        """'/sprint/42' 같은 상대 경로를 절대 URL로 변환합니다. I/O 없음."""
        ...
