from __future__ import annotations

import json
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from app.main import app
from app.services.token_catalog import TokenCatalog
from app.services.token_price import TokenPriceAction

DEFAULT_OUT_DIR = REPO_ROOT / "docs" / "api"


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    out_dir = Path(argv[0]) if argv else DEFAULT_OUT_DIR
    out_dir.mkdir(parents=True, exist_ok=True)

    # metadata is static; no token list is needed to describe the action
    action = TokenPriceAction(
        catalog=TokenCatalog(tokens=()),
        quote_client=None,
        webhook_client=None,
    )
    (out_dir / "metadata.json").write_text(
        json.dumps(action.get_metadata().model_dump(exclude_none=True), indent=2),
        encoding="utf-8",
    )
    (out_dir / "openapi.json").write_text(
        json.dumps(app.openapi(), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    print(f"[ACTION][docs_exported] dir={out_dir}", flush=True)


if __name__ == "__main__":
    main()
