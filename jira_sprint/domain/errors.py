class SprintRequestError(ValueError):
    """요청 descriptor를 만들 수 없을 때 발생하는 오류 (sprintId 누락 등)"""


class JiraTransportError(RuntimeError):
    """Jira API 호출 실패 (HTTP 오류 또는 네트워크 오류)"""

    def __init__(self, message: str, status_code: int | None = None, response_text: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
