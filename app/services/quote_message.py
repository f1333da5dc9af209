from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from app.errors import NoMarketDataError
from app.schemas.discord import (
    BUTTON_STYLE_LINK,
    BUTTON_STYLE_PRIMARY,
    MESSAGE_FLAG_EPHEMERAL,
    RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE,
    ActionRow,
    Button,
    Embed,
    EmbedAuthor,
    EmbedFooter,
    EmbedThumbnail,
    InteractionResponse,
    MessageData,
)
from app.schemas.token import TokenQuote

REFRESH_BUTTON_PREFIX = "token-price:refresh-button:"
EMBED_COLOR = 0xF5C248
PLATFORM_NAME = "Collab.Land"
PLATFORM_URL = "https://collab.land"
CHART_URL = "https://www.coingecko.com/en/coins/{id}"
ICON_URL = "https://cdn.discordapp.com/app-icons/{app_id}/8a814f663844a69d22344dc8f4983de6.png"


def refresh_button_id(token_id: str) -> str:
    return f"{REFRESH_BUTTON_PREFIX}{token_id}"


def parse_refresh_button_id(custom_id: str) -> str | None:
    if not custom_id.startswith(REFRESH_BUTTON_PREFIX):
        return None
    parts = custom_id.split(":")
    return parts[2] if len(parts) > 2 else None


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _display(value: Any) -> str:
    return "" if value is None else str(value)


def _chain_line(quote: TokenQuote) -> str:
    platform = _display(quote.asset_platform_id)
    site = next((s for s in quote.links.blockchain_site if s), None)
    if quote.contract_address and site:
        return f"{platform} [{quote.contract_address}]({site})".strip()
    return platform


def build_description(quote: TokenQuote) -> str:
    if not quote.tickers:
        raise NoMarketDataError(quote.id)
    ticker = quote.tickers[0]
    return "\n".join(
        [
            _chain_line(quote),
            f"Market cap rank: {_display(quote.market_cap_rank)}",
            "",
            f"Price: ${_display(ticker.converted_last.usd)}",
            f"Volume: ${_display(ticker.converted_volume.usd)}",
            f"Timestamp: {_display(ticker.timestamp)}",
            f"Last traded at: {_display(ticker.last_traded_at)}",
        ]
    )


def build_quote_message(
    quote: TokenQuote,
    *,
    application_id: str,
    now: datetime | None = None,
) -> InteractionResponse:
    """Render a quote as an ephemeral embed with Refresh and Chart buttons.

    Raises NoMarketDataError when the quote carries no tickers.
    """
    built_at = now or datetime.now(timezone.utc)
    embed = Embed(
        title=f"${quote.symbol.upper()} ({quote.name})",
        color=EMBED_COLOR,
        author=EmbedAuthor(
            name=PLATFORM_NAME,
            url=PLATFORM_URL,
            icon_url=ICON_URL.format(app_id=application_id),
        ),
        description=build_description(quote),
        thumbnail=EmbedThumbnail(url=quote.image.small) if quote.image.small else None,
        footer=EmbedFooter(text=f"Refreshed at: {format_timestamp(built_at)}"),
    )
    buttons = ActionRow(
        components=[
            Button(style=BUTTON_STYLE_PRIMARY, label="Refresh", custom_id=refresh_button_id(quote.id)),
            Button(style=BUTTON_STYLE_LINK, label="Chart", url=CHART_URL.format(id=quote.id)),
        ]
    )
    return InteractionResponse(
        type=RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE,
        data=MessageData(embeds=[embed], components=[buttons], flags=MESSAGE_FLAG_EPHEMERAL),
    )


def to_edit_payload(response: InteractionResponse) -> dict[str, Any]:
    return response.data.model_dump(exclude_none=True, exclude={"flags"})
