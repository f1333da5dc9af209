from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

INTERACTION_PING = 1
INTERACTION_APPLICATION_COMMAND = 2
INTERACTION_MESSAGE_COMPONENT = 3
INTERACTION_AUTOCOMPLETE = 4

OPTION_TYPE_STRING = 3


class CommandOption(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    type: int
    value: Any = None
    focused: bool = False


class ApplicationCommandData(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    options: list[CommandOption] = Field(default_factory=list)


class ComponentData(BaseModel):
    model_config = ConfigDict(extra="allow")

    custom_id: str
    component_type: int | None = None


class InteractionMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str


class ActionContext(BaseModel):
    """Routing context Collab.Land attaches when relaying an interaction to an action."""

    model_config = ConfigDict(extra="allow")

    callbackUrl: str | None = None


class _InteractionBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    application_id: str
    token: str = ""
    guild_id: str | None = None
    channel_id: str | None = None
    actionContext: ActionContext | None = None


class PingInteraction(_InteractionBase):
    type: Literal[1]


class ApplicationCommandInteraction(_InteractionBase):
    type: Literal[2]
    data: ApplicationCommandData


class MessageComponentInteraction(_InteractionBase):
    type: Literal[3]
    data: ComponentData
    message: InteractionMessage


class AutocompleteInteraction(_InteractionBase):
    type: Literal[4]
    data: ApplicationCommandData


Interaction = Annotated[
    Union[
        PingInteraction,
        ApplicationCommandInteraction,
        MessageComponentInteraction,
        AutocompleteInteraction,
    ],
    Field(discriminator="type"),
]

_interaction_adapter = TypeAdapter(Interaction)


def parse_interaction(payload: dict | str | bytes) -> Interaction:
    if isinstance(payload, (str, bytes)):
        return _interaction_adapter.validate_json(payload)
    return _interaction_adapter.validate_python(payload)


def get_option_value(options: list[CommandOption], name: str) -> Any:
    for option in options:
        if option.name == name:
            return option.value
    return None


def get_focused_string_option(options: list[CommandOption], name: str) -> CommandOption | None:
    for option in options:
        if option.name == name and option.type == OPTION_TYPE_STRING and option.focused:
            return option
    return None
