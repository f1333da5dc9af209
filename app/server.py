from __future__ import annotations

import os
import sys
from typing import Optional, Sequence

import uvicorn

from app.config.settings import get_settings
from app.errors import SUPPORTED_SIGNATURE_TYPES
from app.services.signing import DEFAULT_SIGNATURE_TYPE, generate_key_pair, parse_public_key

PUBLIC_KEY_ENV = "COLLABLAND_ACTION_PUBLIC_KEY"


def resolve_public_key(public_key: Optional[str]) -> str:
    """Export the request verification key; returns the generated signing key, if any."""
    signing_key = ""
    sig_type = public_key.strip().lower() if public_key is not None else DEFAULT_SIGNATURE_TYPE
    if sig_type in SUPPORTED_SIGNATURE_TYPES:
        key_pair = generate_key_pair(sig_type)
        signing_key = key_pair.signing_key
        os.environ[PUBLIC_KEY_ENV] = key_pair.qualified_public_key
    else:
        # fails startup on unknown key types and undecodable keys
        parse_public_key(public_key)
        os.environ[PUBLIC_KEY_ENV] = public_key.strip()
    get_settings.cache_clear()
    return signing_key


def main(argv: Optional[Sequence[str]] = None, *, serve: bool = True) -> str:
    argv = sys.argv if argv is None else argv
    public_key = argv[1] if len(argv) > 1 else os.getenv(PUBLIC_KEY_ENV)
    signing_key = resolve_public_key(public_key or None)
    if signing_key:
        print(f"[SIGNING][action_signing_key] {signing_key}", flush=True)

    settings = get_settings()
    host = settings.HOST or "0.0.0.0"
    print(f"[ACTION][server_start] url=http://{host}:{settings.PORT}", flush=True)
    if serve:
        uvicorn.run("app.main:app", host=host, port=settings.PORT)
    return signing_key


def cli() -> None:
    main()


if __name__ == "__main__":
    cli()
