from typing import Any

from pydantic import BaseModel, Field

RESPONSE_PONG = 1
RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE = 4
RESPONSE_DEFERRED_UPDATE_MESSAGE = 6
RESPONSE_AUTOCOMPLETE_RESULT = 8

COMPONENT_ACTION_ROW = 1
COMPONENT_BUTTON = 2

BUTTON_STYLE_PRIMARY = 1
BUTTON_STYLE_LINK = 5

MESSAGE_FLAG_EPHEMERAL = 1 << 6


class EmbedAuthor(BaseModel):
    name: str
    url: str | None = None
    icon_url: str | None = None


class EmbedFooter(BaseModel):
    text: str


class EmbedThumbnail(BaseModel):
    url: str


class Embed(BaseModel):
    title: str | None = None
    description: str | None = None
    color: int | None = None
    author: EmbedAuthor | None = None
    thumbnail: EmbedThumbnail | None = None
    footer: EmbedFooter | None = None


class Button(BaseModel):
    type: int = COMPONENT_BUTTON
    style: int
    label: str
    custom_id: str | None = None
    url: str | None = None


class ActionRow(BaseModel):
    type: int = COMPONENT_ACTION_ROW
    components: list[Button] = Field(default_factory=list)


class MessageData(BaseModel):
    content: str | None = None
    embeds: list[Embed] | None = None
    components: list[ActionRow] | None = None
    flags: int | None = None


class AutocompleteChoice(BaseModel):
    name: str
    value: str


class AutocompleteData(BaseModel):
    choices: list[AutocompleteChoice] = Field(default_factory=list)


class InteractionResponse(BaseModel):
    type: int
    data: MessageData | AutocompleteData | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def build_simple_response(content: str, *, ephemeral: bool = True) -> InteractionResponse:
    return InteractionResponse(
        type=RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE,
        data=MessageData(
            content=content,
            flags=MESSAGE_FLAG_EPHEMERAL if ephemeral else None,
        ),
    )
