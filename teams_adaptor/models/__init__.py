"""Payload models: Bitbucket events in, Teams messages out (Pydantic)."""

from teams_adaptor.models.bitbucket import (
    Link,
    Links,
    Participant,
    Project,
    PullRequest,
    PullRequestEvent,
    Ref,
    Repository,
    User,
)
from teams_adaptor.models.teams import (
    Attachment,
    CardContent,
    Mentioned,
    MentionEntity,
    MsTeams,
    TeamsMessage,
    TextBlock,
)

__all__ = [
    "Attachment",
    "CardContent",
    "Link",
    "Links",
    "Mentioned",
    "MentionEntity",
    "MsTeams",
    "Participant",
    "Project",
    "PullRequest",
    "PullRequestEvent",
    "Ref",
    "Repository",
    "TeamsMessage",
    "TextBlock",
    "User",
]
