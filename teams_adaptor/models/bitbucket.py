"""Bitbucket Server pull-request event payload (webhook body).

Decoding is permissive: unknown fields are ignored and missing or null
fields fall back to empty values, so partial payloads still parse.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Payload(BaseModel):
    """Base for payload records: camelCase JSON names, nulls treated as missing.

    A null list element decodes as an empty record.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                k: [{} if item is None else item for item in v] if isinstance(v, list) else v
                for k, v in data.items()
                if v is not None
            }
        return data


class Link(_Payload):
    href: str = ""


class CloneLink(_Payload):
    href: str = ""
    name: str = ""


class Links(_Payload):
    """Hyperlinks of a user, project, repository or pull request."""

    self_: list[Link] = Field(default_factory=list, alias="self")
    clone: list[CloneLink] = Field(default_factory=list)


class User(_Payload):
    """Bitbucket user. `name` is the login (UPN-like identifier)."""

    name: str = ""
    email_address: str = ""
    id: int = 0
    display_name: str = ""
    active: bool = False
    slug: str = ""
    type: str = ""
    links: Links = Field(default_factory=Links)


class Participant(_Payload):
    """User taking part in a pull request (author or reviewer)."""

    user: User = Field(default_factory=User)
    role: str = ""
    approved: bool = False
    status: str = ""


class Project(_Payload):
    key: str = ""
    id: int = 0
    name: str = ""
    description: str = ""
    public: bool = False
    type: str = ""
    links: Links = Field(default_factory=Links)


class Repository(_Payload):
    slug: str = ""
    id: int = 0
    name: str = ""
    hierarchy_id: str = ""
    scm_id: str = ""
    state: str = ""
    status_message: str = ""
    forkable: bool = False
    project: Project = Field(default_factory=Project)
    public: bool = False
    links: Links = Field(default_factory=Links)


class Ref(_Payload):
    """Source or target branch of a pull request."""

    id: str = ""
    display_id: str = ""
    latest_commit: str = ""
    type: str = ""
    repository: Repository = Field(default_factory=Repository)


class PullRequest(_Payload):
    id: int = 0
    version: int = 0
    title: str = ""
    state: str = ""
    open: bool = False
    closed: bool = False
    created_date: int = 0
    updated_date: int = 0
    from_ref: Ref = Field(default_factory=Ref)
    to_ref: Ref = Field(default_factory=Ref)
    locked: bool = False
    author: Participant = Field(default_factory=Participant)
    reviewers: list[Participant] = Field(default_factory=list)
    participants: list[Any] = Field(default_factory=list)
    links: Links = Field(default_factory=Links)


class PullRequestEvent(_Payload):
    """Webhook body for pr:* events (e.g. pr:opened, pr:reviewer:updated)."""

    event_key: str = ""
    date: str = ""
    actor: User = Field(default_factory=User)
    pull_request: PullRequest = Field(default_factory=PullRequest)
