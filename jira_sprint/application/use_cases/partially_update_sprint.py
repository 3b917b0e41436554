from jira_sprint.application.use_cases.sprint_operation import SprintOperationUseCase
from jira_sprint.domain.sprint import RequestDescriptor


class PartiallyUpdateSprintUseCase(SprintOperationUseCase):
    """스프린트 부분 수정 Use Case (POST /sprint/{id})"""

    operation = "partially_update_sprint"

    def _build(self, options) -> RequestDescriptor:
        return self.request_builder.partially_update_sprint(options)
