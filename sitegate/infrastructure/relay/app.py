"""Development relay — forwards API / map-tile traffic to an upstream host.

Used while running the mobile app in a browser: the upstream hosts send no
CORS headers and embed their own absolute URLs in JSON (tile styles, media
links), so the relay adds permissive CORS and can rewrite those URLs to
point back at itself.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

FORWARDED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"]

# Never copied between the two connections
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
    "host",
    "content-length",
    "content-encoding",
    "accept-encoding",
}


def _filter_headers(headers) -> dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP_HEADERS}


def rewrite_urls(body: str, target_url: str, public_url: str) -> str:
    """Replace every absolute upstream URL with the relay's public URL."""
    return body.replace(target_url.rstrip("/"), public_url.rstrip("/"))


def create_relay_app(
    target_url: str,
    public_url: str,
    rewrite_json_urls: bool = True,
    mount_prefix: str = "",
    probe_path: str = "/",
    timeout: float = 30.0,
    verify: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build a pass-through relay app.

    Args:
        target_url: upstream base URL, e.g. "http://tiles.example:8080".
        public_url: URL the relay is reachable at, used for JSON rewriting.
        rewrite_json_urls: rewrite `target_url` occurrences in JSON bodies.
        mount_prefix: only forward paths under this prefix, stripping it
            ("/api" turns /api/users/me into {target}/users/me).
        probe_path: upstream path fetched by /proxy-status.
        timeout: upstream request timeout in seconds.
        verify: check the upstream TLS certificate; turn off for dev hosts
            with self-signed or expired certificates.
        transport: optional httpx transport (tests).
    """
    target_url = target_url.rstrip("/")
    mount_prefix = mount_prefix.rstrip("/")

    app = FastAPI(title="SiteGate dev relay", docs_url=None, redoc_url=None)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=FORWARDED_METHODS,
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "proxy": public_url,
            "target": target_url,
        }

    @app.get("/proxy-status")
    async def proxy_status():
        """Check whether the upstream host answers at all."""
        try:
            async with httpx.AsyncClient(timeout=timeout, verify=verify, transport=transport) as client:
                response = await client.get(f"{target_url}{probe_path}")
            return {
                "proxy": "running",
                "target": "available" if response.is_success else "unavailable",
                "statusCode": response.status_code,
            }
        except httpx.HTTPError as e:
            logger.warning("Upstream probe failed: %s", e)
            return {"proxy": "running", "target": "unavailable", "error": str(e)}

    @app.api_route(mount_prefix + "/{path:path}", methods=FORWARDED_METHODS)
    async def forward(path: str, request: Request):
        upstream_url = f"{target_url}/{path}"
        body = await request.body()
        logger.debug("%s %s -> %s", request.method, request.url.path, upstream_url)

        try:
            async with httpx.AsyncClient(timeout=timeout, verify=verify, transport=transport) as client:
                upstream = await client.request(
                    request.method,
                    upstream_url,
                    params=list(request.query_params.multi_items()),
                    headers=_filter_headers(request.headers),
                    content=body,
                )
        except httpx.HTTPError as e:
            logger.error("Proxy error for %s: %s", request.url.path, e)
            return JSONResponse(
                status_code=500,
                content={"error": "Proxy error", "details": str(e), "url": str(request.url.path)},
            )

        headers = _filter_headers(upstream.headers)
        content = upstream.content
        is_json = "application/json" in upstream.headers.get("content-type", "")
        if rewrite_json_urls and is_json:
            content = rewrite_urls(upstream.text, target_url, public_url).encode("utf-8")
            headers["content-type"] = "application/json"
            logger.debug("Rewrote JSON response for %s", request.url.path)

        logger.info("Upstream answered %d for %s", upstream.status_code, request.url.path)
        return Response(content=content, status_code=upstream.status_code, headers=headers)

    return app
