from jira_sprint.application.use_cases.sprint_operation import SprintOperationUseCase
from jira_sprint.domain.sprint import RequestDescriptor


class MoveSprintIssuesUseCase(SprintOperationUseCase):
    """이슈를 스프린트로 이동하는 Use Case (POST /sprint/{id}/issue)"""

    operation = "move_sprint_issues"

    def _build(self, options) -> RequestDescriptor:
        return self.request_builder.move_sprint_issues(options)
