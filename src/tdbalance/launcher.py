from __future__ import annotations

import argparse
import os

import uvicorn

from .config import ASSUMPTIONS_ENV, PRESET_ENV
from .models import PRESET_IDS


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="td-balance-server",
        description="Serve the balance preset API with uvicorn.",
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--preset", choices=PRESET_IDS, default=None)
    parser.add_argument("--assumptions", default=None)
    parser.add_argument("--log-level", default="info")
    args = parser.parse_args(argv)

    if args.preset:
        os.environ[PRESET_ENV] = args.preset
    if args.assumptions:
        os.environ[ASSUMPTIONS_ENV] = args.assumptions

    # Import after env setup so the registry picks up the overrides.
    from tdbalance.api import app as api_app

    print(f"Serving balance API on http://{args.host}:{args.port}")
    uvicorn.run(api_app, host=args.host, port=args.port, log_level=args.log_level)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
