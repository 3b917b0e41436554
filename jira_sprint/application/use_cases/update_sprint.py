from jira_sprint.application.use_cases.sprint_operation import SprintOperationUseCase
from jira_sprint.domain.sprint import RequestDescriptor


class UpdateSprintUseCase(SprintOperationUseCase):
    """스프린트 전체 수정 Use Case (PUT /sprint/{id})"""

    operation = "update_sprint"

    def _build(self, options) -> RequestDescriptor:
        return self.request_builder.update_sprint(options)
