from __future__ import annotations

import threading
from typing import Callable

from app.errors import NoMarketDataError
from app.schemas.discord import (
    RESPONSE_AUTOCOMPLETE_RESULT,
    RESPONSE_DEFERRED_UPDATE_MESSAGE,
    RESPONSE_PONG,
    AutocompleteData,
    InteractionResponse,
    build_simple_response,
)
from app.schemas.interaction import (
    INTERACTION_APPLICATION_COMMAND,
    INTERACTION_AUTOCOMPLETE,
    INTERACTION_MESSAGE_COMPONENT,
    OPTION_TYPE_STRING,
    ApplicationCommandInteraction,
    AutocompleteInteraction,
    Interaction,
    MessageComponentInteraction,
    PingInteraction,
    get_focused_string_option,
    get_option_value,
)
from app.schemas.metadata import (
    ActionMetadata,
    ApplicationCommandSpec,
    CommandMetadata,
    CommandOptionSpec,
    InteractionPattern,
    ManifestVersion,
    MiniAppManifest,
)
from app.services.quote_message import (
    build_quote_message,
    parse_refresh_button_id,
    to_edit_payload,
)
from app.services.token_catalog import TokenCatalog

COMMAND_NAME = "token-price"
SYMBOL_OPTION = "symbol"
COMPONENT_NAMESPACE = "token-price:*"
APPLICATION_COMMAND_CHAT_INPUT = 1


def _spawn_thread(target: Callable[..., None], *args) -> threading.Thread:
    worker = threading.Thread(target=target, args=args, daemon=True, name="token-price-refresh")
    worker.start()
    return worker


class TokenPriceAction:
    """Discord interaction handling for the `/token-price` action."""

    def __init__(
        self,
        *,
        catalog: TokenCatalog,
        quote_client,
        webhook_client,
        spawn: Callable[..., object] | None = None,
    ) -> None:
        self.catalog = catalog
        self.quote_client = quote_client
        self.webhook_client = webhook_client
        self.spawn = spawn or _spawn_thread

    def get_metadata(self) -> ActionMetadata:
        return ActionMetadata(
            manifest=MiniAppManifest(
                appId="token-price",
                developer="collab.land",
                name="TokenPrice",
                platforms=["discord"],
                shortName="token-price",
                version=ManifestVersion(name="0.0.1"),
                website="https://collab.land",
                description="Getting token price",
            ),
            supportedInteractions=[
                InteractionPattern(type=INTERACTION_APPLICATION_COMMAND, names=[COMMAND_NAME]),
                InteractionPattern(type=INTERACTION_AUTOCOMPLETE, names=[COMMAND_NAME]),
                InteractionPattern(type=INTERACTION_MESSAGE_COMPONENT, ids=[COMPONENT_NAMESPACE]),
            ],
            applicationCommands=[
                ApplicationCommandSpec(
                    metadata=CommandMetadata(
                        name="TokenPrice",
                        shortName="token-price",
                        supportedEnvs=["dev", "qa", "staging"],
                    ),
                    name=COMMAND_NAME,
                    type=APPLICATION_COMMAND_CHAT_INPUT,
                    description="/token-price",
                    options=[
                        CommandOptionSpec(
                            name=SYMBOL_OPTION,
                            description="Token symbol",
                            type=OPTION_TYPE_STRING,
                            required=True,
                            autocomplete=True,
                        )
                    ],
                )
            ],
        )

    def handle(self, interaction: Interaction) -> InteractionResponse | None:
        if isinstance(interaction, ApplicationCommandInteraction):
            return self.handle_application_command(interaction)
        if isinstance(interaction, AutocompleteInteraction):
            return self.handle_autocomplete(interaction)
        if isinstance(interaction, MessageComponentInteraction):
            return self.handle_message_component(interaction)
        if isinstance(interaction, PingInteraction):
            return InteractionResponse(type=RESPONSE_PONG)
        raise TypeError(f"unsupported interaction: {type(interaction).__name__}")

    def handle_application_command(
        self, interaction: ApplicationCommandInteraction
    ) -> InteractionResponse:
        if interaction.data.name != COMMAND_NAME:
            return build_simple_response(
                f"Slash command {interaction.data.name} is not implemented."
            )

        symbol = get_option_value(interaction.data.options, SYMBOL_OPTION)
        symbol = symbol if isinstance(symbol, str) else ""
        token = self.catalog.find(symbol)
        if token is None:
            return build_simple_response(f"Unknown token {symbol}")

        try:
            return self.get_quote_message(interaction, token.id)
        except NoMarketDataError:
            return build_simple_response(f"No market data for {symbol}")

    def get_quote_message(self, interaction: Interaction, token_id: str) -> InteractionResponse:
        quote = self.quote_client.get_token_quote(token_id)
        return build_quote_message(quote, application_id=interaction.application_id)

    def handle_autocomplete(self, interaction: AutocompleteInteraction) -> InteractionResponse | None:
        option = get_focused_string_option(interaction.data.options, SYMBOL_OPTION)
        if option is None or not isinstance(option.value, str):
            return None

        choices = self.catalog.autocomplete(option.value)
        print(
            f"[ACTION][autocomplete] prefix={option.value.lower()!r} choices={len(choices)}",
            flush=True,
        )
        return InteractionResponse(
            type=RESPONSE_AUTOCOMPLETE_RESULT,
            data=AutocompleteData(choices=choices),
        )

    def handle_message_component(
        self, interaction: MessageComponentInteraction
    ) -> InteractionResponse:
        token_id = parse_refresh_button_id(interaction.data.custom_id)
        if token_id is not None:
            self.spawn(self.refresh_safely, interaction, token_id)

        # Discord expects a later edit of the original message
        return InteractionResponse(type=RESPONSE_DEFERRED_UPDATE_MESSAGE)

    def refresh(self, interaction: MessageComponentInteraction, token_id: str) -> None:
        message = self.get_quote_message(interaction, token_id)
        self.webhook_client.edit_message(
            interaction, to_edit_payload(message), interaction.message.id
        )
        print(
            f"[REFRESH][message_edited] interaction={interaction.id} token={token_id}",
            flush=True,
        )

    def refresh_safely(self, interaction: MessageComponentInteraction, token_id: str) -> None:
        try:
            self.refresh(interaction, token_id)
        except Exception as exc:
            print(
                f"[REFRESH][followup_error] interaction={interaction.id} "
                f"token={token_id} error={exc!r}",
                flush=True,
            )
