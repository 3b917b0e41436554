from jira_sprint.application.use_cases.sprint_operation import SprintOperationUseCase
from jira_sprint.domain.sprint import RequestDescriptor


class SwapSprintUseCase(SprintOperationUseCase):
    """두 스프린트의 순서를 바꾸는 Use Case (POST /sprint/{id}/swap)"""

    operation = "swap_sprint"

    def _build(self, options) -> RequestDescriptor:
        return self.request_builder.swap_sprint(options)
