from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from app.schemas.interaction import MessageComponentInteraction


class DiscordWebhookClient:
    """Edits interaction messages through the action callback URL or Discord's webhook API."""

    DEFAULT_API_URL = "https://discord.com/api/v10"

    def __init__(self, session: Optional[Any] = None, api_url: Optional[str] = None) -> None:
        self.session = session or requests
        self.api_url = (api_url or self.DEFAULT_API_URL).rstrip("/")

    def message_url(self, interaction: MessageComponentInteraction, message_id: str) -> str:
        context = interaction.actionContext
        if context is not None and context.callbackUrl:
            return f"{context.callbackUrl.rstrip('/')}/messages/{message_id}"
        return (
            f"{self.api_url}/webhooks/{interaction.application_id}"
            f"/{interaction.token}/messages/{message_id}"
        )

    def edit_message(
        self,
        interaction: MessageComponentInteraction,
        payload: Dict[str, Any],
        message_id: str,
    ) -> None:
        response = self.session.patch(
            self.message_url(interaction, message_id),
            headers={"content-type": "application/json"},
            json=payload,
        )
        response.raise_for_status()
