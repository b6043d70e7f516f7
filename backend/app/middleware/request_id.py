"""
Request correlation ids.

A client-supplied ``X-Request-ID`` is reused when it looks like an id (short,
no whitespace or control characters); anything else is replaced with a fresh
uuid4 hex so log lines cannot be forged through the header.
"""

import re
import uuid

from starlette.datastructures import Headers, MutableHeaders

from zencure.logging import LogContext

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = resolve_request_id(Headers(scope=scope).get(REQUEST_ID_HEADER))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message):
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        with LogContext(request_id=request_id):
            await self.app(scope, receive, send_with_id)
