import unittest
from datetime import datetime, timedelta, timezone

from app.errors import NoMarketDataError
from app.schemas.discord import (
    BUTTON_STYLE_LINK,
    BUTTON_STYLE_PRIMARY,
    MESSAGE_FLAG_EPHEMERAL,
    RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE,
)
from app.schemas.token import TokenQuote
from app.services.quote_message import (
    build_quote_message,
    format_timestamp,
    parse_refresh_button_id,
    refresh_button_id,
    to_edit_payload,
)

NOW = datetime(2023, 5, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)


def _quote(**overrides) -> TokenQuote:
    payload = {
        "id": "collab-land",
        "symbol": "collab",
        "name": "Collab.Land",
        "asset_platform_id": "ethereum",
        "contract_address": "0x8b5d1d8b3466ec21f8ee33ce63f319642c026142",
        "links": {
            "homepage": ["https://collab.land"],
            "blockchain_site": [
                "https://etherscan.io/token/0x8b5d1d8b3466ec21f8ee33ce63f319642c026142",
                "",
            ],
        },
        "image": {
            "thumb": "https://assets.coingecko.com/coins/images/1/thumb/collab.png",
            "small": "https://assets.coingecko.com/coins/images/1/small/collab.png",
        },
        "market_cap_rank": 1234,
        "tickers": [
            {
                "base": "COLLAB",
                "target": "USDT",
                "converted_last": {"btc": 0.0000005, "eth": 0.000008, "usd": 0.0142},
                "converted_volume": {"btc": 1.2, "eth": 18.5, "usd": 35210.77},
                "timestamp": "2023-05-01T12:29:10+00:00",
                "last_traded_at": "2023-05-01T12:29:10+00:00",
            },
            {
                "base": "COLLAB",
                "target": "WETH",
                "converted_last": {"usd": 99.0},
                "converted_volume": {"usd": 1.0},
            },
        ],
    }
    payload.update(overrides)
    return TokenQuote.model_validate(payload)


class TestQuoteMessage(unittest.TestCase):
    def test_title_uses_upper_case_symbol_and_name(self):
        response = build_quote_message(
            _quote(id="bitcoin", symbol="btc", name="Bitcoin"), application_id="app-1", now=NOW
        )

        self.assertEqual(response.data.embeds[0].title, "$BTC (Bitcoin)")

    def test_embed_layout(self):
        payload = build_quote_message(_quote(), application_id="app-1", now=NOW).to_payload()

        self.assertEqual(payload["type"], RESPONSE_CHANNEL_MESSAGE_WITH_SOURCE)
        self.assertEqual(payload["data"]["flags"], MESSAGE_FLAG_EPHEMERAL)
        embed = payload["data"]["embeds"][0]
        self.assertEqual(embed["color"], 0xF5C248)
        self.assertEqual(
            embed["author"],
            {
                "name": "Collab.Land",
                "url": "https://collab.land",
                "icon_url": "https://cdn.discordapp.com/app-icons/app-1/8a814f663844a69d22344dc8f4983de6.png",
            },
        )
        self.assertEqual(
            embed["thumbnail"], {"url": "https://assets.coingecko.com/coins/images/1/small/collab.png"}
        )
        self.assertEqual(embed["footer"], {"text": "Refreshed at: 2023-05-01T12:30:45.123Z"})

    def test_description_uses_first_ticker(self):
        response = build_quote_message(_quote(), application_id="app-1", now=NOW)

        lines = response.data.embeds[0].description.split("\n")
        self.assertEqual(
            lines[0],
            "ethereum [0x8b5d1d8b3466ec21f8ee33ce63f319642c026142]"
            "(https://etherscan.io/token/0x8b5d1d8b3466ec21f8ee33ce63f319642c026142)",
        )
        self.assertIn("Market cap rank: 1234", lines)
        self.assertIn("Price: $0.0142", lines)
        self.assertIn("Volume: $35210.77", lines)
        self.assertIn("Timestamp: 2023-05-01T12:29:10+00:00", lines)
        self.assertIn("Last traded at: 2023-05-01T12:29:10+00:00", lines)
        self.assertNotIn("Price: $99.0", lines)

    def test_native_coin_without_contract_shows_platform_only(self):
        response = build_quote_message(
            _quote(asset_platform_id=None, contract_address=None, links={"blockchain_site": []}),
            application_id="app-1",
            now=NOW,
        )

        self.assertTrue(response.data.embeds[0].description.startswith("\nMarket cap rank"))

    def test_buttons_encode_refresh_namespace_and_chart_link(self):
        payload = build_quote_message(_quote(), application_id="app-1", now=NOW).to_payload()

        row = payload["data"]["components"][0]
        self.assertEqual(row["type"], 1)
        refresh, chart = row["components"]
        self.assertEqual(refresh["style"], BUTTON_STYLE_PRIMARY)
        self.assertEqual(refresh["label"], "Refresh")
        self.assertEqual(refresh["custom_id"], "token-price:refresh-button:collab-land")
        self.assertNotIn("url", refresh)
        self.assertEqual(chart["style"], BUTTON_STYLE_LINK)
        self.assertEqual(chart["label"], "Chart")
        self.assertEqual(chart["url"], "https://www.coingecko.com/en/coins/collab-land")
        self.assertNotIn("custom_id", chart)

    def test_building_twice_differs_only_in_footer(self):
        quote = _quote()
        first = build_quote_message(quote, application_id="app-1", now=NOW).to_payload()
        second = build_quote_message(
            quote, application_id="app-1", now=NOW + timedelta(seconds=5)
        ).to_payload()

        self.assertNotEqual(first, second)
        first["data"]["embeds"][0].pop("footer")
        second["data"]["embeds"][0].pop("footer")
        self.assertEqual(first, second)

    def test_same_timestamp_yields_identical_payloads(self):
        quote = _quote()

        self.assertEqual(
            build_quote_message(quote, application_id="app-1", now=NOW).to_payload(),
            build_quote_message(quote, application_id="app-1", now=NOW).to_payload(),
        )

    def test_empty_tickers_raise_no_market_data(self):
        with self.assertRaises(NoMarketDataError) as ctx:
            build_quote_message(_quote(tickers=[]), application_id="app-1", now=NOW)

        self.assertEqual(ctx.exception.token_id, "collab-land")

    def test_edit_payload_drops_flags(self):
        response = build_quote_message(_quote(), application_id="app-1", now=NOW)
        payload = to_edit_payload(response)

        self.assertNotIn("flags", payload)
        self.assertEqual(payload["embeds"], response.to_payload()["data"]["embeds"])
        self.assertEqual(payload["components"], response.to_payload()["data"]["components"])


class TestRefreshButtonId(unittest.TestCase):
    def test_round_trip_and_foreign_ids(self):
        self.assertEqual(refresh_button_id("bitcoin"), "token-price:refresh-button:bitcoin")
        self.assertEqual(parse_refresh_button_id("token-price:refresh-button:bitcoin"), "bitcoin")
        self.assertIsNone(parse_refresh_button_id("token-price:other:bitcoin"))
        self.assertIsNone(parse_refresh_button_id("hello-action:refresh-button:bitcoin"))

    def test_format_timestamp_normalizes_to_utc(self):
        local = datetime(2023, 5, 1, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))

        self.assertEqual(format_timestamp(local), "2023-05-01T12:00:00.000Z")


if __name__ == "__main__":
    unittest.main()
