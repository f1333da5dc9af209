from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote

import requests

from app.schemas.token import TokenInfo, TokenQuote, TokenQuoteOptions


class CoinGeckoClient:
    """Public CoinGecko v3 client for the token list and coin detail endpoints."""

    DEFAULT_BASE_URL = "https://api.coingecko.com"

    def __init__(
        self,
        session: Optional[Any] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.session = session or requests
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout

    def get_tokens(self) -> list[TokenInfo]:
        response = self.session.get(
            f"{self.base_url}/api/v3/coins/list",
            params={"include_platform": "true"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError("token list response must be a JSON array")
        return [TokenInfo.model_validate(row) for row in payload]

    def get_token_quote(
        self,
        token_id: str,
        options: TokenQuoteOptions | Mapping[str, bool] | None = None,
    ) -> TokenQuote:
        if options is None:
            options = TokenQuoteOptions()
        elif not isinstance(options, TokenQuoteOptions):
            options = TokenQuoteOptions.model_validate(dict(options))

        response = self.session.get(
            f"{self.base_url}/api/v3/coins/{quote(token_id, safe='')}",
            params=options.to_query(),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return TokenQuote.model_validate(response.json())
