from jira_sprint.application.use_cases.sprint_operation import SprintOperationUseCase
from jira_sprint.domain.sprint import RequestDescriptor


class GetSprintIssuesUseCase(SprintOperationUseCase):
    """스프린트에 포함된 이슈 목록 조회 Use Case (GET /sprint/{id}/issue)"""

    operation = "get_sprint_issues"

    def _build(self, options) -> RequestDescriptor:
        return self.request_builder.get_sprint_issues(options)
