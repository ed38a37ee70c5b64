"""Lightweight aiohttp server -- the JSON API behind the widget pages.

Exposes the cron editor/parser, the subnet calculator, the URL sanitizer,
the build-time license inventory, and robots.txt / sitemap.xml.
No framework magic, no middleware stack.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from aiohttp import web
from pydantic import ValidationError

from core.models.cron import CronFields
from cron import (
    DOW_NAMES,
    FIELD_ORDER,
    LIMITS,
    MONTH_NAMES,
    build_cron,
    empty_fields,
    humanize,
    parse_cron,
    reset_slot,
    toggle_slot,
)
from tools.subnet import compute_subnet
from tools.url import sanitize_url

if TYPE_CHECKING:
    from core.config import AppConfig

logger = logging.getLogger(__name__)

# One day
PUBLIC_CACHE = "public, max-age=86400"

# Quote entities escape() leaves alone by default
_XML_ENTITIES = {"\"": "&quot;", "'": "&apos;"}


def create_app(config: AppConfig) -> web.Application:
    """Create and configure the aiohttp application."""
    app = web.Application()

    app["config"] = config
    # Stable lastmod for the sitemap, approximating deploy time
    app["started_at"] = datetime.now(timezone.utc)

    app.router.add_get("/health", handle_health)
    app.router.add_post("/api/cron/parse", handle_cron_parse)
    app.router.add_post("/api/cron/build", handle_cron_build)
    app.router.add_post("/api/cron/toggle", handle_cron_toggle)
    app.router.add_post("/api/cron/every", handle_cron_every)
    app.router.add_get("/api/cron/empty", handle_cron_empty)
    app.router.add_get("/api/cron/limits", handle_cron_limits)
    app.router.add_post("/api/subnet", handle_subnet)
    app.router.add_post("/api/url/sanitize", handle_url_sanitize)
    app.router.add_get("/licenses.json", handle_licenses)
    app.router.add_get("/robots.txt", handle_robots)
    app.router.add_get("/sitemap.xml", handle_sitemap)

    return app


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error(message: str, status: int = 400) -> web.Response:
    return web.json_response({"error": message}, status=status)


async def _read_body(request: web.Request) -> dict | web.Response:
    """Decode a JSON object body, or return the 400 response to send instead."""
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return _error("Invalid JSON")
    if not isinstance(body, dict):
        return _error("Request body must be a JSON object")
    return body


def _fields_response(fields: CronFields) -> web.Response:
    return web.json_response({
        "fields": fields.model_dump(mode="json"),
        "cron": build_cron(fields),
        "human": humanize(fields),
    })


def _editor_request(body: dict) -> tuple[CronFields, str] | web.Response:
    """Validate the {fields, field} part shared by the editor endpoints."""
    if "fields" not in body or "field" not in body:
        return _error("Missing required fields: fields, field")
    slot = body["field"]
    if slot not in FIELD_ORDER:
        return _error(f"field must be one of: {', '.join(FIELD_ORDER)}")
    try:
        fields = CronFields.model_validate(body["fields"])
    except ValidationError as e:
        return _error(f"Invalid fields: {e.error_count()} validation error(s)")
    return fields, slot


def _origin(request: web.Request) -> str:
    config: AppConfig = request.app["config"]
    return config.site.origin.rstrip("/") or str(request.url.origin())


# ---------------------------------------------------------------------------
# Route handlers
# ---------------------------------------------------------------------------

async def handle_health(request: web.Request) -> web.Response:
    """GET /health -- health check."""
    return web.json_response({"status": "ok"})


async def handle_cron_parse(request: web.Request) -> web.Response:
    """POST /api/cron/parse -- parse a cron line.

    Body: {"expression": "0 9 * * 1-5"}

    A line that fails to parse is still a 200: the widget renders the error.
    """
    body = await _read_body(request)
    if isinstance(body, web.Response):
        return body
    expression = body.get("expression")
    if not isinstance(expression, str):
        return _error("Missing required field: expression")

    result = parse_cron(expression)
    if not result.ok:
        logger.debug("Rejected cron %r: %s", expression, result.error)
    return web.json_response(result.model_dump(mode="json", exclude_none=True))


async def handle_cron_build(request: web.Request) -> web.Response:
    """POST /api/cron/build -- canonical string + description for editor fields.

    Body: {"fields": {"minute": {"any": false, "values": [0]}, ...}}
    """
    body = await _read_body(request)
    if isinstance(body, web.Response):
        return body
    if "fields" not in body:
        return _error("Missing required field: fields")
    try:
        fields = CronFields.model_validate(body["fields"])
    except ValidationError as e:
        return _error(f"Invalid fields: {e.error_count()} validation error(s)")
    return web.json_response({"cron": build_cron(fields), "human": humanize(fields)})


async def handle_cron_toggle(request: web.Request) -> web.Response:
    """POST /api/cron/toggle -- flip one value of one slot.

    Body: {"fields": {...}, "field": "hour", "value": 9}
    """
    body = await _read_body(request)
    if isinstance(body, web.Response):
        return body
    parsed = _editor_request(body)
    if isinstance(parsed, web.Response):
        return parsed
    fields, slot = parsed

    value = body.get("value")
    if not isinstance(value, int) or isinstance(value, bool):
        return _error("value must be an integer")

    return _fields_response(toggle_slot(fields, slot, value))


async def handle_cron_every(request: web.Request) -> web.Response:
    """POST /api/cron/every -- reset one slot to "every".

    Body: {"fields": {...}, "field": "dow"}
    """
    body = await _read_body(request)
    if isinstance(body, web.Response):
        return body
    parsed = _editor_request(body)
    if isinstance(parsed, web.Response):
        return parsed
    fields, slot = parsed
    return _fields_response(reset_slot(fields, slot))


async def handle_cron_empty(request: web.Request) -> web.Response:
    """GET /api/cron/empty -- the editor's starting state."""
    return _fields_response(empty_fields())


async def handle_cron_limits(request: web.Request) -> web.Response:
    """GET /api/cron/limits -- slot bounds and display names."""
    return web.json_response({
        "limits": {slot: limit.model_dump() for slot, limit in LIMITS.items()},
        "month_names": list(MONTH_NAMES),
        "dow_names": list(DOW_NAMES),
    })


async def handle_subnet(request: web.Request) -> web.Response:
    """POST /api/subnet -- IPv4 subnet details.

    Body: {"ip": "192.168.1.10", "mask": "/24"}
    """
    body = await _read_body(request)
    if isinstance(body, web.Response):
        return body
    ip, mask = body.get("ip"), body.get("mask")
    if not isinstance(ip, str) or not isinstance(mask, str):
        return _error("Missing required fields: ip, mask")

    try:
        info = compute_subnet(ip, mask)
    except ValueError as e:
        return _error(str(e))
    return web.json_response(info.model_dump(mode="json"))


async def handle_url_sanitize(request: web.Request) -> web.Response:
    """POST /api/url/sanitize -- normalize a repository URL.

    Body: {"url": "git+ssh://git@github.com/owner/repo.git", "infer_shorthand": true, "keep_hash": true}
    """
    body = await _read_body(request)
    if isinstance(body, web.Response):
        return body
    if "url" not in body:
        return _error("Missing required field: url")

    cleaned = sanitize_url(
        body["url"],
        infer_shorthand=bool(body.get("infer_shorthand", True)),
        keep_hash=bool(body.get("keep_hash", True)),
    )
    return web.json_response({"url": cleaned})


async def handle_licenses(request: web.Request) -> web.Response:
    """GET /licenses.json -- the inventory written by `utilidesk licenses`."""
    config: AppConfig = request.app["config"]
    path = config.licenses_path
    if not path.is_file():
        logger.warning("License inventory not found at %s", path)
        return _error("License inventory has not been generated", status=404)
    return web.Response(
        text=path.read_text(),
        content_type="application/json",
        headers={"Cache-Control": "no-cache"},
    )


async def handle_robots(request: web.Request) -> web.Response:
    """GET /robots.txt -- allow everything, point at the sitemap."""
    lines = [
        "# allow crawling everything by default",
        "User-agent: *",
        "Disallow:",
        "",
        f"Sitemap: {_origin(request)}/sitemap.xml",
    ]
    return web.Response(
        text="\n".join(lines) + "\n",
        content_type="text/plain",
        charset="utf-8",
        headers={"Cache-Control": PUBLIC_CACHE},
    )


async def handle_sitemap(request: web.Request) -> web.Response:
    """GET /sitemap.xml -- the configured pages."""
    config: AppConfig = request.app["config"]
    origin = _origin(request)
    lastmod = request.app["started_at"].isoformat()

    entries = "".join(
        "\n  <url>"
        f"\n    <loc>{escape(origin + page.path, _XML_ENTITIES)}</loc>"
        f"\n    <lastmod>{lastmod}</lastmod>"
        f"\n    <changefreq>{page.changefreq}</changefreq>"
        f"\n    <priority>{page.priority:.1f}</priority>"
        "\n  </url>"
        for page in config.site.pages
    )
    body = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        f"{entries}\n</urlset>\n"
    )
    return web.Response(
        text=body,
        content_type="application/xml",
        charset="utf-8",
        headers={"Cache-Control": PUBLIC_CACHE},
    )
