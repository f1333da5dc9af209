from __future__ import annotations

from dataclasses import dataclass

from app.schemas.discord import AutocompleteChoice
from app.schemas.token import TokenInfo

REFERENCE_TOKEN_ID = "collab-land"
REFERENCE_TOKEN_ALIASES = ("collab.land", "collab-land")
MAX_AUTOCOMPLETE_CHOICES = 20


@dataclass(frozen=True)
class TokenCatalog:
    """Read-only token list snapshot shared by every interaction."""

    tokens: tuple[TokenInfo, ...]
    reference_token: TokenInfo | None = None

    @classmethod
    def from_tokens(cls, tokens: list[TokenInfo]) -> "TokenCatalog":
        snapshot = tuple(tokens)
        reference = next((t for t in snapshot if t.id == REFERENCE_TOKEN_ID), None)
        return cls(tokens=snapshot, reference_token=reference)

    def __len__(self) -> int:
        return len(self.tokens)

    def find(self, symbol: str) -> TokenInfo | None:
        needle = symbol.lower()
        for token in self.tokens:
            if needle in (token.id.lower(), token.name.lower(), token.symbol.lower()):
                return token
        return None

    def autocomplete(self, prefix: str) -> list[AutocompleteChoice]:
        prefix = prefix.lower()
        choices = [
            _choice(token)
            for token in self.tokens
            if token.id != REFERENCE_TOKEN_ID and token.symbol.lower().startswith(prefix)
        ]
        choices.sort(key=lambda c: (c.name.casefold(), c.name))
        choices = choices[:MAX_AUTOCOMPLETE_CHOICES]

        if self.reference_token is not None and any(
            alias.startswith(prefix) for alias in REFERENCE_TOKEN_ALIASES
        ):
            choices.insert(0, _choice(self.reference_token))
        return choices


def _choice(token: TokenInfo) -> AutocompleteChoice:
    # one display format for every choice, the reference token included
    return AutocompleteChoice(name=f"{token.symbol}: {token.name}", value=token.id)


def load_token_catalog(client) -> TokenCatalog:
    catalog = TokenCatalog.from_tokens(client.get_tokens())
    print(
        f"[CATALOG][catalog_loaded] tokens={len(catalog)} "
        f"reference_token={int(catalog.reference_token is not None)}",
        flush=True,
    )
    return catalog
