from pydantic import BaseModel, ConfigDict, Field


class TokenInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    name: str
    platforms: dict[str, str | None] = Field(default_factory=dict)


class TokenQuoteOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    localization: bool = False
    market_data: bool = False
    community_data: bool = False
    developer_data: bool = False
    sparkline: bool = False

    def to_query(self) -> dict[str, str]:
        return {name: str(value).lower() for name, value in self.model_dump().items()}


class QuoteDescription(BaseModel):
    model_config = ConfigDict(extra="allow")

    en: str = ""


class QuoteLinks(BaseModel):
    model_config = ConfigDict(extra="allow")

    homepage: list[str] = Field(default_factory=list)
    blockchain_site: list[str | None] = Field(default_factory=list)


class QuoteImage(BaseModel):
    thumb: str | None = None
    small: str | None = None
    large: str | None = None


class ConvertedAmounts(BaseModel):
    btc: float | None = None
    eth: float | None = None
    usd: float | None = None


class TickerMarket(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = ""
    identifier: str = ""


class Ticker(BaseModel):
    model_config = ConfigDict(extra="allow")

    base: str = ""
    target: str = ""
    market: TickerMarket | None = None
    last: float | None = None
    volume: float | None = None
    converted_last: ConvertedAmounts = Field(default_factory=ConvertedAmounts)
    converted_volume: ConvertedAmounts = Field(default_factory=ConvertedAmounts)
    trust_score: str | None = None
    timestamp: str | None = None
    last_traded_at: str | None = None
    last_fetch_at: str | None = None
    trade_url: str | None = None


class TokenQuote(BaseModel):
    """Coin detail record from `/api/v3/coins/{id}`; only the rendered fields are typed."""

    model_config = ConfigDict(extra="allow")

    id: str
    symbol: str
    name: str
    asset_platform_id: str | None = None
    contract_address: str | None = None
    platforms: dict[str, str | None] = Field(default_factory=dict)
    description: QuoteDescription = Field(default_factory=QuoteDescription)
    links: QuoteLinks = Field(default_factory=QuoteLinks)
    image: QuoteImage = Field(default_factory=QuoteImage)
    market_cap_rank: int | None = None
    last_updated: str | None = None
    tickers: list[Ticker] = Field(default_factory=list)
