"""In-process client for exercising a Router as an ASGI app.

Requests go through ``Router.__call__`` exactly as a server would send
them, so tests see normalization, negotiation and the 404 response as
deployed.  Headers and bodies are not modelled: roost routes on method
and path only.
"""

from typing import Any

from roost.http.response import Response
from roost.routing.router import Router


def _collect(messages: list[dict[str, Any]]) -> Response:
    """Rebuild a Response from the ASGI messages the router sent."""
    start = next(m for m in messages if m["type"] == "http.response.start")
    body = b"".join(m.get("body", b"") for m in messages if m["type"] == "http.response.body")

    content_type = ""
    headers: list[tuple[str, str]] = []
    for raw_name, raw_value in start["headers"]:
        name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
        if name == "content-type":
            content_type = value
        elif name != "content-length":
            headers.append((name, value))

    return Response(
        body=body,
        status=start["status"],
        content_type=content_type,
        headers=tuple(headers),
    )


class TestClient:
    """Drive a Router through ASGI without a server.

    Usage::

        async with TestClient(router) as client:
            response = await client.get("/example")
            assert response.text == "example get"
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __aenter__(self) -> "TestClient":
        await self.lifespan("startup")
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.lifespan("shutdown")

    async def lifespan(self, *phases: str) -> list[str]:
        """Run lifespan ``phases`` in order and return the message types sent back.

        The router's lifespan loop ends on ``shutdown``, so a sequence is
        sent as one lifespan scope.
        """
        incoming = [{"type": f"lifespan.{phase}"} for phase in phases]
        if "shutdown" not in phases:
            # Close the loop so the call returns
            incoming.append({"type": "lifespan.shutdown"})
        sent: list[str] = []

        async def receive() -> dict[str, Any]:
            return incoming.pop(0)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message["type"])

        await self.router({"type": "lifespan"}, receive, send)
        return sent[: len(phases)]

    async def request(self, method: str, path: str) -> Response:
        """Send one request and return the Response the router produced."""
        path_part, _, query = path.partition("?")
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query.encode("latin-1"),
            "headers": [],
        }
        messages: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message: dict[str, Any]) -> None:
            messages.append(message)

        await self.router(scope, receive, send)
        return _collect(messages)

    async def get(self, path: str) -> Response:
        return await self.request("GET", path)

    async def post(self, path: str) -> Response:
        return await self.request("POST", path)

    async def put(self, path: str) -> Response:
        return await self.request("PUT", path)

    async def patch(self, path: str) -> Response:
        return await self.request("PATCH", path)

    async def delete(self, path: str) -> Response:
        return await self.request("DELETE", path)

    async def options(self, path: str) -> Response:
        return await self.request("OPTIONS", path)
