"""Run the Road Rails web API.

Usage:
    uv run python scripts/serve.py
    uv run python scripts/serve.py --port 8080 --network road.json
"""

from __future__ import annotations

import argparse
import os

from dotenv import load_dotenv

load_dotenv()


def main() -> None:
    ap = argparse.ArgumentParser(description="Road Rails: web API")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--network", default="", help="Road network JSON to preload")
    args = ap.parse_args()

    if args.network:
        os.environ["ROAD_RAILS_NETWORK_FILE"] = args.network

    import uvicorn

    uvicorn.run("road_rails.web.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
