"""
Data contracts for Asana resources.

Every model allows extra fields so anything Asana adds is carried through
untouched. Only the identifier is enforced locally; the rest is Asana's
business. Models are dumped with ``exclude_unset`` so callers get back
exactly what upstream sent.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


class ResourceRef(BaseModel):
    """Compact representation of a resource embedded in another one"""

    model_config = ConfigDict(extra="allow")

    gid: Optional[str] = None
    resource_type: Optional[str] = None
    name: Optional[str] = None


class AsanaResource(BaseModel):
    model_config = ConfigDict(extra="allow")

    gid: str
    resource_type: Optional[str] = None


class NamedResource(AsanaResource):
    name: Optional[str] = None


class User(NamedResource):
    email: Optional[str] = None
    workspaces: Optional[List[ResourceRef]] = None


class Workspace(NamedResource):
    is_organization: Optional[bool] = None
    email_domains: Optional[List[str]] = None


class Team(NamedResource):
    description: Optional[str] = None
    html_description: Optional[str] = None
    organization: Optional[ResourceRef] = None
    visibility: Optional[str] = None


class TeamMembership(AsanaResource):
    user: Optional[ResourceRef] = None
    team: Optional[ResourceRef] = None
    is_guest: Optional[bool] = None
    is_admin: Optional[bool] = None


class Project(NamedResource):
    archived: Optional[bool] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    due_on: Optional[str] = None
    start_on: Optional[str] = None
    public: Optional[bool] = None
    default_view: Optional[str] = None
    owner: Optional[ResourceRef] = None
    team: Optional[ResourceRef] = None
    workspace: Optional[ResourceRef] = None


class ProjectStatus(AsanaResource):
    title: Optional[str] = None
    text: Optional[str] = None
    color: Optional[str] = None
    author: Optional[ResourceRef] = None
    created_at: Optional[str] = None


class ProjectMembership(AsanaResource):
    user: Optional[ResourceRef] = None
    project: Optional[ResourceRef] = None
    access_level: Optional[str] = None


class Section(NamedResource):
    project: Optional[ResourceRef] = None
    created_at: Optional[str] = None


class Task(NamedResource):
    resource_subtype: Optional[str] = None
    assignee: Optional[ResourceRef] = None
    completed: Optional[bool] = None
    completed_at: Optional[str] = None
    due_on: Optional[str] = None
    due_at: Optional[str] = None
    start_on: Optional[str] = None
    notes: Optional[str] = None
    html_notes: Optional[str] = None
    parent: Optional[ResourceRef] = None
    projects: Optional[List[ResourceRef]] = None
    tags: Optional[List[ResourceRef]] = None
    followers: Optional[List[ResourceRef]] = None
    permalink_url: Optional[str] = None


class Tag(NamedResource):
    color: Optional[str] = None
    notes: Optional[str] = None
    workspace: Optional[ResourceRef] = None


class Story(AsanaResource):
    type: Optional[str] = None
    resource_subtype: Optional[str] = None
    text: Optional[str] = None
    html_text: Optional[str] = None
    is_pinned: Optional[bool] = None
    created_at: Optional[str] = None
    created_by: Optional[ResourceRef] = None


class Attachment(NamedResource):
    host: Optional[str] = None
    download_url: Optional[str] = None
    permanent_url: Optional[str] = None
    view_url: Optional[str] = None
    parent: Optional[ResourceRef] = None


class CustomField(NamedResource):
    resource_subtype: Optional[str] = None
    description: Optional[str] = None
    enabled: Optional[bool] = None
    precision: Optional[int] = None
    enum_options: Optional[List[Dict[str, Any]]] = None


class Portfolio(NamedResource):
    color: Optional[str] = None
    public: Optional[bool] = None
    owner: Optional[ResourceRef] = None
    workspace: Optional[ResourceRef] = None


class Goal(NamedResource):
    notes: Optional[str] = None
    due_on: Optional[str] = None
    start_on: Optional[str] = None
    status: Optional[str] = None
    is_workspace_level: Optional[bool] = None
    owner: Optional[ResourceRef] = None
    team: Optional[ResourceRef] = None
    workspace: Optional[ResourceRef] = None


class GoalRelationship(AsanaResource):
    resource_subtype: Optional[str] = None
    contribution_weight: Optional[Union[int, float]] = None
    supporting_resource: Optional[ResourceRef] = None
    supported_goal: Optional[ResourceRef] = None


class Webhook(AsanaResource):
    active: Optional[bool] = None
    target: Optional[str] = None
    resource: Optional[ResourceRef] = None
    filters: Optional[List[Dict[str, Any]]] = None
    created_at: Optional[str] = None


class UserTaskList(NamedResource):
    owner: Optional[ResourceRef] = None
    workspace: Optional[ResourceRef] = None


class Job(AsanaResource):
    """Async job returned by duplicate endpoints"""

    status: Optional[str] = None
    new_project: Optional[ResourceRef] = None
    new_task: Optional[ResourceRef] = None


class NextPage(BaseModel):
    """Cursor for the following page; passed back to Asana untouched"""

    offset: str
    path: Optional[str] = None
    uri: Optional[str] = None


class PaginatedResponse(BaseModel):
    data: List[Any] = Field(default_factory=list)
    next_page: Optional[NextPage] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"data": self.data}
        if self.next_page is not None:
            result["next_page"] = self.next_page.model_dump(exclude_none=True)
        return result


class PaginationParams(BaseModel):
    limit: Optional[int] = None
    offset: Optional[str] = None


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_resource(model: Type[ModelT], data: Any) -> Dict[str, Any]:
    """Validate one upstream object and hand it back as a plain dict"""
    return model.model_validate(data).model_dump(exclude_unset=True)


def parse_resources(model: Type[ModelT], items: List[Any]) -> List[Dict[str, Any]]:
    return [parse_resource(model, item) for item in items]
