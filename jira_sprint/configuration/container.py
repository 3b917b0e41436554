from dataclasses import dataclass
from functools import lru_cache

from jira_sprint.adapters.outbound.agile_url_resolver import AgileUrlResolver
from jira_sprint.adapters.outbound.httpx_transport import HttpxTransport
from jira_sprint.application.services.request_builder import SprintRequestBuilder
from jira_sprint.application.use_cases.create_sprint import CreateSprintUseCase
from jira_sprint.application.use_cases.delete_sprint import DeleteSprintUseCase
from jira_sprint.application.use_cases.get_sprint import GetSprintUseCase
from jira_sprint.application.use_cases.get_sprint_issues import GetSprintIssuesUseCase
from jira_sprint.application.use_cases.move_sprint_issues import MoveSprintIssuesUseCase
from jira_sprint.application.use_cases.partially_update_sprint import PartiallyUpdateSprintUseCase
from jira_sprint.application.use_cases.swap_sprint import SwapSprintUseCase
from jira_sprint.application.use_cases.update_sprint import UpdateSprintUseCase
from jira_sprint.configuration.settings import Settings, build_settings


@dataclass(frozen=True)
class Container:
    settings: Settings
    request_builder: SprintRequestBuilder
    create_sprint_use_case: CreateSprintUseCase
    get_sprint_use_case: GetSprintUseCase
    update_sprint_use_case: UpdateSprintUseCase
    partially_update_sprint_use_case: PartiallyUpdateSprintUseCase
    delete_sprint_use_case: DeleteSprintUseCase
    get_sprint_issues_use_case: GetSprintIssuesUseCase
    move_sprint_issues_use_case: MoveSprintIssuesUseCase
    swap_sprint_use_case: SwapSprintUseCase


@lru_cache(maxsize=1)
def build_container() -> Container:
    settings = build_settings()

    url_resolver = AgileUrlResolver(
        base_url=settings.jira_base_url,
        api_version=settings.agile_api_version,
    )

    transport = HttpxTransport(
        user=settings.user_id,
        password=settings.user_password,
        timeout=settings.http_timeout,
    )

    request_builder = SprintRequestBuilder(url_resolver=url_resolver)

    # 모든 스프린트 Use Case가 같은 builder / transport를 공유 (둘 다 상태 없음)
    deps = {"request_builder": request_builder, "transport": transport}

    return Container(
        settings=settings,
        request_builder=request_builder,
        create_sprint_use_case=CreateSprintUseCase(**deps),
        get_sprint_use_case=GetSprintUseCase(**deps),
        update_sprint_use_case=UpdateSprintUseCase(**deps),
        partially_update_sprint_use_case=PartiallyUpdateSprintUseCase(**deps),
        delete_sprint_use_case=DeleteSprintUseCase(**deps),
        get_sprint_issues_use_case=GetSprintIssuesUseCase(**deps),
        move_sprint_issues_use_case=MoveSprintIssuesUseCase(**deps),
        swap_sprint_use_case=SwapSprintUseCase(**deps),
    )


def clear_container() -> None:
    build_container.cache_clear()
