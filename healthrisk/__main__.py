from __future__ import annotations

import argparse
import logging

import uvicorn

from healthrisk.internal_core import load_config


def main() -> None:
    cfg = load_config()
    parser = argparse.ArgumentParser(description="Run the healthrisk profiler HTTP service.")
    parser.add_argument("--host", default=cfg.PROFILER_HOST, help=f"Bind host (default: {cfg.PROFILER_HOST})")
    parser.add_argument("--port", type=int, default=cfg.PORT, help=f"Bind port (default: {cfg.PORT})")
    parser.add_argument(
        "--log-level",
        default=cfg.PROFILER_LOG_LEVEL,
        help=f"Logging level (default: {cfg.PROFILER_LOG_LEVEL})",
    )
    args = parser.parse_args()

    level = str(args.log_level or "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("server is running on port %d", args.port)
    uvicorn.run("healthrisk.api.main:app", host=args.host, port=args.port, log_level=level.lower())


if __name__ == "__main__":
    main()
