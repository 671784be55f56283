"""Response — what a controller action becomes on the ASGI path.

Actions may return a Response directly or any value that
``roost.server.negotiation.negotiate`` converts into one.  Unmatched
requests get the fixed ``not_found()`` response.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Body access --

    @property
    def body_bytes(self) -> bytes:
        """Body encoded as bytes."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        """Body decoded as text."""
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8")


NOT_FOUND_BODY = "404 Not Found"


def not_found() -> Response:
    """The fixed response for an unmatched route or missing action."""
    return Response(body=NOT_FOUND_BODY, status=404, content_type="text/plain; charset=utf-8")
