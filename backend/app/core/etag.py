"""ETag support for downloadable content."""

import hashlib

from fastapi import Request, status
from fastapi.responses import Response


def compute_etag(content: str | bytes) -> str:
    """Compute ETag from content (weak ETag with W/ prefix)."""
    content_bytes = content.encode("utf-8") if isinstance(content, str) else content
    return f'W/"{hashlib.md5(content_bytes).hexdigest()}"'


def check_if_none_match(request: Request, etag: str) -> bool:
    """
    Check If-None-Match header against computed ETag.

    Returns True if client has matching ETag (should return 304).
    """
    if_none_match = request.headers.get("If-None-Match")
    if not if_none_match:
        return False

    server_etag = etag.replace("W/", "").strip('"')
    candidates = (c.strip().replace("W/", "").strip('"') for c in if_none_match.split(","))
    return any(c == "*" or c == server_etag for c in candidates)


def create_not_modified_response(etag: str) -> Response:
    """Create 304 Not Modified response with ETag header."""
    return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers={"ETag": etag})
