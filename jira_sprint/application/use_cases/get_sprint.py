from jira_sprint.application.use_cases.sprint_operation import SprintOperationUseCase
from jira_sprint.domain.sprint import RequestDescriptor


class GetSprintUseCase(SprintOperationUseCase):
    """스프린트 단건을 조회하는 Use Case (GET /sprint/{id})"""

    operation = "get_sprint"

    def _build(self, options) -> RequestDescriptor:
        return self.request_builder.get_sprint(options)
