"""Microsoft Teams incoming-webhook message with one Adaptive Card."""

from pydantic import BaseModel, ConfigDict, Field

CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
CARD_TYPE = "AdaptiveCard"
CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"
CARD_VERSION = "1.2"
CARD_WIDTH = "Full"


class Mentioned(BaseModel):
    """User to notify: id is the e-mail address, name the display name."""

    id: str
    name: str


class MentionEntity(BaseModel):
    """Inline @mention; `text` must match the <at>...</at> markup in the body."""

    type: str = "mention"
    text: str
    mentioned: Mentioned


class TextBlock(BaseModel):
    type: str = "TextBlock"
    text: str
    wrap: bool = False


class MsTeams(BaseModel):
    width: str = CARD_WIDTH
    entities: list[MentionEntity] = Field(default_factory=list)


class CardContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = CARD_TYPE
    body: list[TextBlock] = Field(default_factory=list)
    schema_: str = Field(default=CARD_SCHEMA, alias="$schema")
    version: str = CARD_VERSION
    msteams: MsTeams = Field(default_factory=MsTeams)


class Attachment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(default=CARD_CONTENT_TYPE, alias="contentType")
    content: CardContent


class TeamsMessage(BaseModel):
    type: str = "message"
    attachments: list[Attachment] = Field(default_factory=list)
