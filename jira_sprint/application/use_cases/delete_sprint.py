from jira_sprint.application.use_cases.sprint_operation import SprintOperationUseCase
from jira_sprint.domain.sprint import RequestDescriptor


class DeleteSprintUseCase(SprintOperationUseCase):
    """스프린트를 삭제하는 Use Case (DELETE /sprint/{id})"""

    operation = "delete_sprint"

    def _build(self, options) -> RequestDescriptor:
        return self.request_builder.delete_sprint(options)
