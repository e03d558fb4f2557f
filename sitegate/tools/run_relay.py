"""Run the development relay.

Usage:
    python -m sitegate.tools.run_relay                      # API relay on :8083, /api prefix
    python -m sitegate.tools.run_relay --target http://tiles:8080 --port 8082 --prefix ""
    python -m sitegate.tools.run_relay --no-rewrite
    python -m sitegate.tools.run_relay --insecure               # upstream with a bad certificate
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from sitegate.config import settings
from sitegate.infrastructure.relay.app import create_relay_app

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="SiteGate development relay")
    parser.add_argument(
        "--target", type=str, default=settings.relay_target_url,
        help="Upstream base URL (default: RELAY_TARGET_URL)",
    )
    parser.add_argument(
        "--port", type=int, default=settings.relay_port,
        help="Port to listen on (default: RELAY_PORT)",
    )
    parser.add_argument(
        "--public-url", type=str, default=None,
        help="URL clients reach the relay at (default: RELAY_PUBLIC_URL)",
    )
    parser.add_argument(
        "--prefix", type=str, default="/api",
        help="Only forward paths under this prefix, stripping it (default: /api)",
    )
    parser.add_argument(
        "--no-rewrite", action="store_true",
        help="Do not rewrite upstream URLs in JSON responses",
    )
    parser.add_argument(
        "--probe-path", type=str, default="/",
        help="Upstream path fetched by /proxy-status (e.g. /styles/basic-preview/style.json)",
    )
    parser.add_argument(
        "--insecure", action="store_true",
        help="Skip TLS certificate verification of the upstream",
    )
    args = parser.parse_args()

    public_url = args.public_url or settings.relay_public_url
    app = create_relay_app(
        target_url=args.target,
        public_url=public_url,
        rewrite_json_urls=not args.no_rewrite,
        mount_prefix=args.prefix,
        probe_path=args.probe_path,
        verify=not args.insecure,
    )
    if args.insecure:
        logger.warning("TLS verification of %s is disabled", args.target)

    logger.info("=== SiteGate dev relay ===")
    logger.info("Listening on: %s", public_url)
    logger.info("Forwarding %s/* -> %s/*", args.prefix, args.target)
    logger.info("Health check: %s/health", public_url)
    uvicorn.run(app, host="0.0.0.0", port=args.port)


if __name__ == "__main__":
    main()
