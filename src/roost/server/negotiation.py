"""Content negotiation — maps action return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from roost.http.response import Response


def negotiate(value: Any) -> Response:
    """Convert a controller action's return value to a Response.

    Dispatch order:
    1. ``Response``         -> pass through
    2. ``None``             -> 204, empty body
    3. ``str``              -> 200, text/html
    4. ``bytes``            -> 200, application/octet-stream
    5. ``dict`` / ``list``  -> 200, application/json
    6. ``(value, int)``     -> negotiate value, override status
    7. anything else        -> ``str(value)`` as text/html
    """
    match value:
        case Response():
            return value
        case None:
            return Response(body="", status=204)
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type="application/json",
            )
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case _:
            return Response(body=str(value))
