"""Run the wallet aggregator API under uvicorn.

Host and port come from AGGREGATOR_HOST / BACKEND_PORT.
"""
import os
import uvicorn

from wallet_aggregator.main import app


def main() -> None:
    host = os.environ.get("AGGREGATOR_HOST", "127.0.0.1")
    port = int(os.environ.get("BACKEND_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
