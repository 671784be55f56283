"""ASGI sender — emits one roost Response as start and body messages.

Responses are always sent whole: roost has no streaming actions, so the
body message never sets ``more_body``.
"""

from roost._internal.asgi import Send
from roost.http.response import Response

# Statuses that never carry a message body, besides 1xx
_EMPTY_STATUSES = frozenset({204, 304})


def _encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    pairs = [("content-type", response.content_type), *response.headers]
    pairs.append(("content-length", str(content_length)))
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send) -> None:
    """Send ``response`` through an ASGI ``send`` callable."""
    if response.status < 200 or response.status in _EMPTY_STATUSES:
        body = b""
    else:
        body = response.body_bytes

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body})
