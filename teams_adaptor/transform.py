"""Build a Teams notification from a Bitbucket pull-request event.

Reviewers and the PR author are @mentioned with Teams mention entities.
The mention markup (<at>name UPN</at>) is parsed by Teams, so the JSON
must keep angle brackets literal.
"""

import json
import logging
import re

from pydantic import ValidationError

from teams_adaptor.errors import DecodeError
from teams_adaptor.logging import TRACE
from teams_adaptor.models import (
    Attachment,
    CardContent,
    Mentioned,
    MentionEntity,
    MsTeams,
    PullRequestEvent,
    TeamsMessage,
    TextBlock,
    User,
)

LOG = logging.getLogger("teams_adaptor.transform")

# Character set, not a prefix: "pr:reviewer:approved" -> "eviewer:approved"
EVENT_KEY_STRIP_CHARS = "pr:"
REVIEWER_SEPARATOR = ", "
REPLACEMENT_CHAR = "\ufffd"
_LONE_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def parse_event(event_bytes: bytes | str) -> PullRequestEvent:
    """Decode webhook body into PullRequestEvent.

    Raises DecodeError on invalid JSON or incompatible field types.
    """
    try:
        data = json.loads(event_bytes)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Invalid event JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"Event JSON must be an object, got {type(data).__name__}")
    try:
        return PullRequestEvent.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected event shape: {e.error_count()} invalid field(s)") from e


def mention_text(user: User) -> str:
    return f"<at>{user.name} UPN</at>"


def mention_entity(user: User) -> MentionEntity:
    return MentionEntity(
        text=mention_text(user),
        mentioned=Mentioned(id=user.email_address, name=user.display_name),
    )


def event_action(event_key: str) -> str:
    """Verb shown in the message, e.g. pr:opened -> opened."""
    return event_key.lstrip(EVENT_KEY_STRIP_CHARS)


def build_notification(event: PullRequestEvent) -> TeamsMessage:
    """Map event to a Teams message mentioning all reviewers, then the author."""
    pr = event.pull_request
    if not pr.links.self_:
        raise DecodeError("pullRequest.links.self is empty; no link to the pull request")

    reviewers_list = ""
    entities: list[MentionEntity] = []
    for reviewer in pr.reviewers:
        entity = mention_entity(reviewer.user)
        reviewers_list += entity.text + REVIEWER_SEPARATOR
        entities.append(entity)
    reviewers_list = reviewers_list.removesuffix(REVIEWER_SEPARATOR)

    author = mention_entity(pr.author.user)
    entities.append(author)
    LOG.log(TRACE, "Mention entities: %s", entities)

    text = (
        f"Hi Team, {author.text} {event_action(event.event_key)} a PR, please review: "
        f"[{pr.title}]({pr.links.self_[0].href})\n\n"
        f"CC: {reviewers_list}"
    )
    LOG.log(TRACE, "Notification text: %s", text)

    content = CardContent(body=[TextBlock(text=text)], msteams=MsTeams(entities=entities))
    return TeamsMessage(attachments=[Attachment(content=content)])


def to_json(message: TeamsMessage) -> bytes:
    """Serialize compactly with <, > and non-ASCII kept literal, newline-terminated.

    Lone surrogates (valid as JSON escapes, invalid in UTF-8) become U+FFFD.
    """
    data = message.model_dump(by_alias=True)
    text = json.dumps(data, ensure_ascii=False, separators=(",", ":")) + "\n"
    return _LONE_SURROGATE_RE.sub(REPLACEMENT_CHAR, text).encode("utf-8")


def transform(event_bytes: bytes | str) -> bytes:
    """Bitbucket event JSON in, Teams message JSON out."""
    return to_json(build_notification(parse_event(event_bytes)))
