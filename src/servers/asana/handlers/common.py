"""Argument models and helpers shared by every tool module."""

import json
from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from src.servers.asana.utils.client import CLEAR, AsanaClient
from src.servers.asana.utils.config import ServerConfig
from src.servers.asana.utils.models import PaginationParams

ResponseFormat = Literal["json", "markdown"]


@dataclass
class ToolContext:
    """Everything a handler needs for one request"""

    client: AsanaClient
    config: ServerConfig

    def page(self, args: "ListArgs") -> PaginationParams:
        limit = args.limit or self.config.default_page_size
        return PaginationParams(
            limit=min(limit, self.config.max_page_size), offset=args.offset
        )


class ToolArgs(BaseModel):
    """Base for tool arguments; unknown keys are ignored"""


class FormatArgs(ToolArgs):
    format: ResponseFormat = Field(
        default="json",
        description="Output format: 'json' for raw data or 'markdown' for a readable summary",
    )


class ListArgs(FormatArgs):
    limit: Optional[int] = Field(
        default=None, ge=1, le=100, description="Results per page (1-100, default 20)"
    )
    offset: Optional[str] = Field(
        default=None, description="Pagination offset token from a previous response"
    )


def cleared(args: BaseModel, field: str) -> Any:
    """Value of ``field``, or CLEAR if the caller explicitly passed null"""
    value = getattr(args, field)
    if value is None and field in args.model_fields_set:
        return CLEAR
    return value


def success(message: str, **payload: Any) -> str:
    return json.dumps({"success": True, "message": message, **payload}, indent=2, default=str)


def fields(args: BaseModel, *exclude: str, nullable: tuple = ()) -> dict:
    """Request body from an argument model, minus routing and output fields"""
    body = args.model_dump(exclude={"format", *exclude})
    for name in nullable:
        body[name] = cleared(args, name)
    return body
