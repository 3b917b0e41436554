from jira_sprint.application.use_cases.sprint_operation import SprintOperationUseCase
from jira_sprint.domain.sprint import RequestDescriptor


class CreateSprintUseCase(SprintOperationUseCase):
    """스프린트를 생성하는 Use Case (POST /sprint)"""

    operation = "create_sprint"

    def _build(self, options) -> RequestDescriptor:
        return self.request_builder.create_sprint(options)
