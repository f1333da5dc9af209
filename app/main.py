from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.routes import router
from app.config.settings import get_settings
from app.integrations.coingecko import CoinGeckoClient
from app.integrations.discord_rest import DiscordWebhookClient
from app.services.token_catalog import load_token_catalog
from app.services.token_price import TokenPriceAction

PUBLIC_DIR = Path(__file__).resolve().parents[1] / "public"


def build_action(settings) -> TokenPriceAction:
    quote_client = CoinGeckoClient(
        base_url=settings.COINGECKO_API_URL,
        timeout=settings.COINGECKO_TIMEOUT_SEC,
    )
    return TokenPriceAction(
        # no retry: a failed token list load aborts startup
        catalog=load_token_catalog(quote_client),
        quote_client=quote_client,
        webhook_client=DiscordWebhookClient(api_url=settings.DISCORD_API_URL),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "token_price_action", None) is None:
        app.state.token_price_action = app.state.build_action(app.state.get_settings())
    print("[ACTION][ready] action=token-price", flush=True)
    yield


app = FastAPI(title="Token Price Action", version="0.0.1", lifespan=lifespan)
app.include_router(router, prefix="/token-price")

# NOTE: lazy-loaded so app import does not require env or network during tests.
app.state.get_settings = get_settings
app.state.build_action = build_action
app.state.token_price_action = None

if PUBLIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")
