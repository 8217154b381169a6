import logging
from typing import Any, Dict, List, Optional, Type

import httpx
from pydantic import BaseModel

from src.servers.asana.utils.credentials import TenantCredentials
from src.servers.asana.utils.config import DEFAULT_TIMEOUT
from src.servers.asana.utils.errors import (
    AsanaApiError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    parse_retry_after,
)
from src.servers.asana.utils.models import (
    Attachment,
    CustomField,
    Goal,
    GoalRelationship,
    Job,
    NextPage,
    PaginatedResponse,
    PaginationParams,
    Portfolio,
    Project,
    ProjectMembership,
    ProjectStatus,
    Section,
    Story,
    Tag,
    Task,
    Team,
    TeamMembership,
    User,
    UserTaskList,
    Webhook,
    Workspace,
    parse_resource,
    parse_resources,
)

ASANA_API_URL = "https://app.asana.com/api/1.0"

logger = logging.getLogger("asana-client")


class _Clear:
    """Marks a body field that must be sent as an explicit JSON null"""

    def __repr__(self) -> str:
        return "CLEAR"


CLEAR = _Clear()


def remove_none_values(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def build_body(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset fields and turn CLEAR into null"""
    return {
        k: (None if v is CLEAR else v) for k, v in remove_none_values(data).items()
    }


def join_gids(gids: Optional[List[str]]) -> Optional[str]:
    return ",".join(gids) if gids else None


class AsanaClient:
    """Async client for the Asana REST API, bound to one tenant's token."""

    def __init__(
        self,
        credentials: TenantCredentials,
        base_url: str = ASANA_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.credentials.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        query = remove_none_values(params) if params else None
        payload = {"data": build_body(json)} if json is not None else None

        logger.debug(f"{method} {path}")
        async with httpx.AsyncClient(
            transport=self.transport, timeout=self.timeout
        ) as client:
            response = await client.request(
                method, url, headers=self._headers(), params=query, json=payload
            )

        self._raise_for_status(response, path)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, path: str) -> None:
        status = response.status_code
        if status == 429:
            raise RateLimitError(
                "Rate limit exceeded",
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
            )
        if status in (401, 403):
            raise AuthenticationError(
                "Authentication failed. Check your Asana access token.",
                status_code=status,
            )
        if status == 404:
            raise NotFoundError("Resource", path)
        if not response.is_success:
            raise AsanaApiError(_error_message(response), status_code=status)

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        model: Optional[Type[BaseModel]] = None,
    ) -> Any:
        """Perform one call and return the unwrapped ``data`` value (None for 204)"""
        response = await self._send(method, path, json=json, params=params)
        if response.status_code == 204 or not response.content:
            return None

        data = _json_object(response).get("data")
        if model is not None and data is not None:
            return parse_resource(model, data)
        return data

    async def _request_paginated(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        pagination: Optional[PaginationParams] = None,
        model: Optional[Type[BaseModel]] = None,
    ) -> PaginatedResponse:
        query = dict(params or {})
        if pagination is not None:
            query["limit"] = pagination.limit
            query["offset"] = pagination.offset

        response = await self._send("GET", path, params=query)
        body = _json_object(response) if response.content else {}

        items = body.get("data") or []
        if model is not None:
            items = parse_resources(model, items)

        next_page = body.get("next_page")
        return PaginatedResponse(
            data=items,
            next_page=NextPage.model_validate(next_page) if next_page else None,
        )

    # Workspaces

    async def list_workspaces(self, pagination: Optional[PaginationParams] = None) -> PaginatedResponse:
        return await self._request_paginated("/workspaces", pagination=pagination, model=Workspace)

    async def get_workspace(self, workspace_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/workspaces/{workspace_gid}", model=Workspace)

    async def update_workspace(self, workspace_gid: str, name: Optional[str] = None) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/workspaces/{workspace_gid}", json={"name": name}, model=Workspace
        )

    async def add_user_to_workspace(self, workspace_gid: str, user: str) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/workspaces/{workspace_gid}/addUser", json={"user": user}, model=User
        )

    async def remove_user_from_workspace(self, workspace_gid: str, user: str) -> None:
        await self._request(
            "POST", f"/workspaces/{workspace_gid}/removeUser", json={"user": user}
        )

    # Users

    async def get_me(self) -> Dict[str, Any]:
        return await self._request("GET", "/users/me", model=User)

    async def get_user(self, user_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/users/{user_gid}", model=User)

    async def list_workspace_users(
        self, workspace_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/workspaces/{workspace_gid}/users", pagination=pagination, model=User
        )

    # Teams

    async def create_team(self, **fields) -> Dict[str, Any]:
        return await self._request("POST", "/teams", json=fields, model=Team)

    async def get_team(self, team_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/teams/{team_gid}", model=Team)

    async def update_team(self, team_gid: str, **fields) -> Dict[str, Any]:
        return await self._request("PUT", f"/teams/{team_gid}", json=fields, model=Team)

    async def list_teams(
        self, workspace_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/organizations/{workspace_gid}/teams", pagination=pagination, model=Team
        )

    async def list_user_teams(
        self,
        user_gid: str,
        organization: str,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/users/{user_gid}/teams",
            params={"organization": organization},
            pagination=pagination,
            model=Team,
        )

    async def list_team_users(
        self, team_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/teams/{team_gid}/users", pagination=pagination, model=User
        )

    async def add_user_to_team(self, team_gid: str, user: str) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/teams/{team_gid}/addUser", json={"user": user}, model=TeamMembership
        )

    async def remove_user_from_team(self, team_gid: str, user: str) -> None:
        await self._request("POST", f"/teams/{team_gid}/removeUser", json={"user": user})

    # Projects

    async def create_project(self, **fields) -> Dict[str, Any]:
        return await self._request("POST", "/projects", json=fields, model=Project)

    async def get_project(self, project_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/projects/{project_gid}", model=Project)

    async def update_project(self, project_gid: str, **fields) -> Dict[str, Any]:
        return await self._request("PUT", f"/projects/{project_gid}", json=fields, model=Project)

    async def delete_project(self, project_gid: str) -> None:
        await self._request("DELETE", f"/projects/{project_gid}")

    async def duplicate_project(
        self,
        project_gid: str,
        name: str,
        team: Optional[str] = None,
        include: Optional[List[str]] = None,
        schedule_dates: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/projects/{project_gid}/duplicate",
            json={
                "name": name,
                "team": team,
                "include": include,
                "schedule_dates": schedule_dates,
            },
            model=Job,
        )

    async def list_projects(
        self,
        workspace: Optional[str] = None,
        team: Optional[str] = None,
        archived: Optional[bool] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            "/projects",
            params={"workspace": workspace, "team": team, "archived": archived},
            pagination=pagination,
            model=Project,
        )

    async def list_workspace_projects(
        self,
        workspace_gid: str,
        archived: Optional[bool] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/workspaces/{workspace_gid}/projects",
            params={"archived": archived},
            pagination=pagination,
            model=Project,
        )

    async def list_team_projects(
        self,
        team_gid: str,
        archived: Optional[bool] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/teams/{team_gid}/projects",
            params={"archived": archived},
            pagination=pagination,
            model=Project,
        )

    async def list_task_projects(
        self, task_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/tasks/{task_gid}/projects", pagination=pagination, model=Project
        )

    async def get_project_task_counts(self, project_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/projects/{project_gid}/task_counts")

    async def add_members_to_project(self, project_gid: str, members: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/projects/{project_gid}/addMembers",
            json={"members": join_gids(members)},
            model=Project,
        )

    async def remove_members_from_project(self, project_gid: str, members: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/projects/{project_gid}/removeMembers",
            json={"members": join_gids(members)},
            model=Project,
        )

    async def add_followers_to_project(self, project_gid: str, followers: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/projects/{project_gid}/addFollowers",
            json={"followers": join_gids(followers)},
            model=Project,
        )

    async def remove_followers_from_project(self, project_gid: str, followers: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/projects/{project_gid}/removeFollowers",
            json={"followers": join_gids(followers)},
            model=Project,
        )

    async def get_project_membership(self, membership_gid: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/project_memberships/{membership_gid}", model=ProjectMembership
        )

    async def list_project_memberships(
        self, project_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/projects/{project_gid}/project_memberships",
            pagination=pagination,
            model=ProjectMembership,
        )

    async def create_project_status(
        self,
        project_gid: str,
        text: str,
        color: str,
        title: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/projects/{project_gid}/project_statuses",
            json={"text": text, "color": color, "title": title},
            model=ProjectStatus,
        )

    async def get_project_status(self, status_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/project_statuses/{status_gid}", model=ProjectStatus)

    async def delete_project_status(self, status_gid: str) -> None:
        await self._request("DELETE", f"/project_statuses/{status_gid}")

    async def list_project_statuses(
        self, project_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/projects/{project_gid}/project_statuses",
            pagination=pagination,
            model=ProjectStatus,
        )

    # Sections

    async def create_section(
        self,
        project_gid: str,
        name: str,
        insert_before: Optional[str] = None,
        insert_after: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/projects/{project_gid}/sections",
            json={"name": name, "insert_before": insert_before, "insert_after": insert_after},
            model=Section,
        )

    async def get_section(self, section_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/sections/{section_gid}", model=Section)

    async def update_section(self, section_gid: str, name: str) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/sections/{section_gid}", json={"name": name}, model=Section
        )

    async def delete_section(self, section_gid: str) -> None:
        await self._request("DELETE", f"/sections/{section_gid}")

    async def list_project_sections(
        self, project_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/projects/{project_gid}/sections", pagination=pagination, model=Section
        )

    async def add_task_to_section(
        self,
        section_gid: str,
        task: str,
        insert_before: Optional[str] = None,
        insert_after: Optional[str] = None,
    ) -> None:
        await self._request(
            "POST",
            f"/sections/{section_gid}/addTask",
            json={"task": task, "insert_before": insert_before, "insert_after": insert_after},
        )

    async def move_section(
        self,
        project_gid: str,
        section: str,
        before_section: Optional[str] = None,
        after_section: Optional[str] = None,
    ) -> None:
        await self._request(
            "POST",
            f"/projects/{project_gid}/sections/insert",
            json={
                "section": section,
                "before_section": before_section,
                "after_section": after_section,
            },
        )

    # Tasks

    async def create_task(self, **fields) -> Dict[str, Any]:
        return await self._request("POST", "/tasks", json=fields, model=Task)

    async def get_task(self, task_gid: str, opt_fields: Optional[List[str]] = None) -> Dict[str, Any]:
        return await self._request(
            "GET",
            f"/tasks/{task_gid}",
            params={"opt_fields": join_gids(opt_fields)},
            model=Task,
        )

    async def update_task(self, task_gid: str, **fields) -> Dict[str, Any]:
        return await self._request("PUT", f"/tasks/{task_gid}", json=fields, model=Task)

    async def delete_task(self, task_gid: str) -> None:
        await self._request("DELETE", f"/tasks/{task_gid}")

    async def duplicate_task(
        self, task_gid: str, name: str, include: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/tasks/{task_gid}/duplicate",
            json={"name": name, "include": join_gids(include)},
            model=Job,
        )

    async def list_tasks(
        self,
        project: Optional[str] = None,
        section: Optional[str] = None,
        workspace: Optional[str] = None,
        assignee: Optional[str] = None,
        completed_since: Optional[str] = None,
        modified_since: Optional[str] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            "/tasks",
            params={
                "project": project,
                "section": section,
                "workspace": workspace,
                "assignee": assignee,
                "completed_since": completed_since,
                "modified_since": modified_since,
            },
            pagination=pagination,
            model=Task,
        )

    async def list_project_tasks(
        self, project_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/projects/{project_gid}/tasks", pagination=pagination, model=Task
        )

    async def list_section_tasks(
        self, section_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/sections/{section_gid}/tasks", pagination=pagination, model=Task
        )

    async def list_tag_tasks(
        self, tag_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/tags/{tag_gid}/tasks", pagination=pagination, model=Task
        )

    async def search_tasks(
        self,
        workspace_gid: str,
        text: Optional[str] = None,
        completed: Optional[bool] = None,
        assignee: Optional[List[str]] = None,
        projects: Optional[List[str]] = None,
        tags: Optional[List[str]] = None,
        due_on_before: Optional[str] = None,
        due_on_after: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_ascending: Optional[bool] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/workspaces/{workspace_gid}/tasks/search",
            params={
                "text": text,
                "completed": completed,
                "assignee.any": join_gids(assignee),
                "projects.any": join_gids(projects),
                "tags.any": join_gids(tags),
                "due_on.before": due_on_before,
                "due_on.after": due_on_after,
                "sort_by": sort_by,
                "sort_ascending": sort_ascending,
            },
            pagination=pagination,
            model=Task,
        )

    async def create_subtask(self, parent_gid: str, **fields) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/tasks/{parent_gid}/subtasks", json=fields, model=Task
        )

    async def list_subtasks(
        self, task_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/tasks/{task_gid}/subtasks", pagination=pagination, model=Task
        )

    async def set_parent_task(
        self,
        task_gid: str,
        parent: Any,
        insert_before: Optional[str] = None,
        insert_after: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/tasks/{task_gid}/setParent",
            json={
                "parent": CLEAR if parent is None else parent,
                "insert_before": insert_before,
                "insert_after": insert_after,
            },
            model=Task,
        )

    async def add_project_to_task(
        self,
        task_gid: str,
        project: str,
        section: Optional[str] = None,
        insert_before: Optional[str] = None,
        insert_after: Optional[str] = None,
    ) -> None:
        await self._request(
            "POST",
            f"/tasks/{task_gid}/addProject",
            json={
                "project": project,
                "section": section,
                "insert_before": insert_before,
                "insert_after": insert_after,
            },
        )

    async def remove_project_from_task(self, task_gid: str, project: str) -> None:
        await self._request(
            "POST", f"/tasks/{task_gid}/removeProject", json={"project": project}
        )

    async def add_tag_to_task(self, task_gid: str, tag: str) -> None:
        await self._request("POST", f"/tasks/{task_gid}/addTag", json={"tag": tag})

    async def remove_tag_from_task(self, task_gid: str, tag: str) -> None:
        await self._request("POST", f"/tasks/{task_gid}/removeTag", json={"tag": tag})

    async def add_followers_to_task(self, task_gid: str, followers: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/tasks/{task_gid}/addFollowers",
            json={"followers": followers},
            model=Task,
        )

    async def remove_follower_from_task(self, task_gid: str, follower: str) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/tasks/{task_gid}/removeFollower",
            json={"follower": follower},
            model=Task,
        )

    async def list_task_dependencies(
        self, task_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/tasks/{task_gid}/dependencies", pagination=pagination, model=Task
        )

    async def add_task_dependencies(self, task_gid: str, dependencies: List[str]) -> None:
        await self._request(
            "POST",
            f"/tasks/{task_gid}/addDependencies",
            json={"dependencies": dependencies},
        )

    async def remove_task_dependencies(self, task_gid: str, dependencies: List[str]) -> None:
        await self._request(
            "POST",
            f"/tasks/{task_gid}/removeDependencies",
            json={"dependencies": dependencies},
        )

    async def list_task_dependents(
        self, task_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/tasks/{task_gid}/dependents", pagination=pagination, model=Task
        )

    async def add_task_dependents(self, task_gid: str, dependents: List[str]) -> None:
        await self._request(
            "POST", f"/tasks/{task_gid}/addDependents", json={"dependents": dependents}
        )

    async def remove_task_dependents(self, task_gid: str, dependents: List[str]) -> None:
        await self._request(
            "POST", f"/tasks/{task_gid}/removeDependents", json={"dependents": dependents}
        )

    async def get_user_task_list(self, user_gid: str, workspace: str) -> Dict[str, Any]:
        return await self._request(
            "GET",
            f"/users/{user_gid}/user_task_list",
            params={"workspace": workspace},
            model=UserTaskList,
        )

    async def list_user_task_list_tasks(
        self,
        user_task_list_gid: str,
        completed_since: Optional[str] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/user_task_lists/{user_task_list_gid}/tasks",
            params={"completed_since": completed_since},
            pagination=pagination,
            model=Task,
        )

    # Tags

    async def create_tag(self, **fields) -> Dict[str, Any]:
        return await self._request("POST", "/tags", json=fields, model=Tag)

    async def get_tag(self, tag_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/tags/{tag_gid}", model=Tag)

    async def update_tag(self, tag_gid: str, **fields) -> Dict[str, Any]:
        return await self._request("PUT", f"/tags/{tag_gid}", json=fields, model=Tag)

    async def delete_tag(self, tag_gid: str) -> None:
        await self._request("DELETE", f"/tags/{tag_gid}")

    async def list_tags(
        self, workspace_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/workspaces/{workspace_gid}/tags", pagination=pagination, model=Tag
        )

    async def list_task_tags(
        self, task_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/tasks/{task_gid}/tags", pagination=pagination, model=Tag
        )

    # Stories

    async def create_story(self, task_gid: str, **fields) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/tasks/{task_gid}/stories", json=fields, model=Story
        )

    async def get_story(self, story_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/stories/{story_gid}", model=Story)

    async def update_story(self, story_gid: str, **fields) -> Dict[str, Any]:
        return await self._request("PUT", f"/stories/{story_gid}", json=fields, model=Story)

    async def delete_story(self, story_gid: str) -> None:
        await self._request("DELETE", f"/stories/{story_gid}")

    async def list_task_stories(
        self, task_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/tasks/{task_gid}/stories", pagination=pagination, model=Story
        )

    # Attachments

    async def get_attachment(self, attachment_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/attachments/{attachment_gid}", model=Attachment)

    async def delete_attachment(self, attachment_gid: str) -> None:
        await self._request("DELETE", f"/attachments/{attachment_gid}")

    async def list_task_attachments(
        self, task_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/tasks/{task_gid}/attachments",
            pagination=pagination,
            model=Attachment,
        )

    # Custom fields

    async def create_custom_field(self, **fields) -> Dict[str, Any]:
        return await self._request("POST", "/custom_fields", json=fields, model=CustomField)

    async def get_custom_field(self, custom_field_gid: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/custom_fields/{custom_field_gid}", model=CustomField
        )

    async def update_custom_field(self, custom_field_gid: str, **fields) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/custom_fields/{custom_field_gid}", json=fields, model=CustomField
        )

    async def delete_custom_field(self, custom_field_gid: str) -> None:
        await self._request("DELETE", f"/custom_fields/{custom_field_gid}")

    async def list_custom_fields(
        self, workspace_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/workspaces/{workspace_gid}/custom_fields",
            pagination=pagination,
            model=CustomField,
        )

    async def add_custom_field_to_project(
        self, project_gid: str, custom_field: str, is_important: Optional[bool] = None
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/projects/{project_gid}/addCustomFieldSetting",
            json={"custom_field": custom_field, "is_important": is_important},
        )

    async def remove_custom_field_from_project(self, project_gid: str, custom_field: str) -> None:
        await self._request(
            "POST",
            f"/projects/{project_gid}/removeCustomFieldSetting",
            json={"custom_field": custom_field},
        )

    # Portfolios

    async def create_portfolio(self, **fields) -> Dict[str, Any]:
        return await self._request("POST", "/portfolios", json=fields, model=Portfolio)

    async def get_portfolio(self, portfolio_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/portfolios/{portfolio_gid}", model=Portfolio)

    async def update_portfolio(self, portfolio_gid: str, **fields) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/portfolios/{portfolio_gid}", json=fields, model=Portfolio
        )

    async def delete_portfolio(self, portfolio_gid: str) -> None:
        await self._request("DELETE", f"/portfolios/{portfolio_gid}")

    async def list_portfolios(
        self,
        workspace: str,
        owner: Optional[str] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            "/portfolios",
            params={"workspace": workspace, "owner": owner},
            pagination=pagination,
            model=Portfolio,
        )

    async def list_portfolio_items(
        self, portfolio_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/portfolios/{portfolio_gid}/items", pagination=pagination, model=Project
        )

    async def add_item_to_portfolio(self, portfolio_gid: str, item: str) -> None:
        await self._request(
            "POST", f"/portfolios/{portfolio_gid}/items", json={"item": item}
        )

    async def remove_item_from_portfolio(self, portfolio_gid: str, item: str) -> None:
        await self._request(
            "POST", f"/portfolios/{portfolio_gid}/removeItem", json={"item": item}
        )

    async def add_members_to_portfolio(self, portfolio_gid: str, members: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/portfolios/{portfolio_gid}/addMembers",
            json={"members": join_gids(members)},
            model=Portfolio,
        )

    async def remove_members_from_portfolio(self, portfolio_gid: str, members: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/portfolios/{portfolio_gid}/removeMembers",
            json={"members": join_gids(members)},
            model=Portfolio,
        )

    # Goals

    async def create_goal(self, **fields) -> Dict[str, Any]:
        return await self._request("POST", "/goals", json=fields, model=Goal)

    async def get_goal(self, goal_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/goals/{goal_gid}", model=Goal)

    async def update_goal(self, goal_gid: str, **fields) -> Dict[str, Any]:
        return await self._request("PUT", f"/goals/{goal_gid}", json=fields, model=Goal)

    async def delete_goal(self, goal_gid: str) -> None:
        await self._request("DELETE", f"/goals/{goal_gid}")

    async def list_goals(
        self,
        workspace: Optional[str] = None,
        team: Optional[str] = None,
        is_workspace_level: Optional[bool] = None,
        time_periods: Optional[List[str]] = None,
        portfolio: Optional[str] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            "/goals",
            params={
                "workspace": workspace,
                "team": team,
                "is_workspace_level": is_workspace_level,
                "time_periods": join_gids(time_periods),
                "portfolio": portfolio,
            },
            pagination=pagination,
            model=Goal,
        )

    async def add_followers_to_goal(self, goal_gid: str, followers: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/goals/{goal_gid}/addFollowers",
            json={"followers": join_gids(followers)},
            model=Goal,
        )

    async def remove_followers_from_goal(self, goal_gid: str, followers: List[str]) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/goals/{goal_gid}/removeFollowers",
            json={"followers": join_gids(followers)},
            model=Goal,
        )

    async def list_goal_parent_goals(
        self, goal_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/goals/{goal_gid}/parentGoals", pagination=pagination, model=Goal
        )

    async def get_goal_relationship(self, relationship_gid: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/goal_relationships/{relationship_gid}", model=GoalRelationship
        )

    async def update_goal_relationship(
        self, relationship_gid: str, contribution_weight: Optional[float] = None
    ) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            f"/goal_relationships/{relationship_gid}",
            json={"contribution_weight": contribution_weight},
            model=GoalRelationship,
        )

    async def list_goal_relationships(
        self, goal_gid: str, pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse:
        return await self._request_paginated(
            f"/goals/{goal_gid}/goal_relationships",
            pagination=pagination,
            model=GoalRelationship,
        )

    async def add_supporting_relationship(
        self,
        goal_gid: str,
        supporting_resource: str,
        contribution_weight: Optional[float] = None,
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/goals/{goal_gid}/addSupportingRelationship",
            json={
                "supporting_resource": supporting_resource,
                "contribution_weight": contribution_weight,
            },
            model=GoalRelationship,
        )

    async def remove_supporting_relationship(self, goal_gid: str, supporting_relationship: str) -> None:
        await self._request(
            "POST",
            f"/goals/{goal_gid}/removeSupportingRelationship",
            json={"supporting_relationship": supporting_relationship},
        )

    # Webhooks

    async def create_webhook(
        self,
        resource: str,
        target: str,
        filters: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/webhooks",
            json={"resource": resource, "target": target, "filters": filters},
            model=Webhook,
        )

    async def get_webhook(self, webhook_gid: str) -> Dict[str, Any]:
        return await self._request("GET", f"/webhooks/{webhook_gid}", model=Webhook)

    async def update_webhook(self, webhook_gid: str, filters: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/webhooks/{webhook_gid}", json={"filters": filters}, model=Webhook
        )

    async def delete_webhook(self, webhook_gid: str) -> None:
        await self._request("DELETE", f"/webhooks/{webhook_gid}")

    async def list_webhooks(
        self,
        workspace: str,
        resource: Optional[str] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> PaginatedResponse:
        return await self._request_paginated(
            "/webhooks",
            params={"workspace": workspace, "resource": resource},
            pagination=pagination,
            model=Webhook,
        )

    # Typeahead

    async def typeahead(
        self,
        workspace_gid: str,
        resource_type: str,
        query: Optional[str] = None,
        count: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        return await self._request(
            "GET",
            f"/workspaces/{workspace_gid}/typeahead",
            params={"resource_type": resource_type, "query": query, "count": count},
        )


def _json_object(response: httpx.Response) -> Dict[str, Any]:
    """Decode a success body, which Asana always wraps in a JSON object"""
    try:
        body = response.json()
    except ValueError:
        raise AsanaApiError(
            "Asana returned a response that is not valid JSON",
            status_code=response.status_code,
        )
    if not isinstance(body, dict):
        raise AsanaApiError(
            "Asana returned an unexpected response shape",
            status_code=response.status_code,
        )
    return body


def _error_message(response: httpx.Response) -> str:
    """Best-effort message from an Asana error body"""
    fallback = f"Asana API error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback

    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        message = errors[0].get("message")
        if message:
            return message
    return body.get("message") or fallback


def create_asana_client(
    credentials: TenantCredentials,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> AsanaClient:
    """Build a client for one tenant"""
    return AsanaClient(credentials, transport=transport, timeout=timeout)
