from __future__ import annotations


class CoachError(Exception):
    """Base class for all errors raised by the coaching core."""


class InvalidEndpoint(CoachError):
    """A backend was configured with an unusable URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid API URL: {url!r}")
        self.url = url


class NoOfflineEquivalent(CoachError):
    """The operation needs a remote backend and none is available."""


class RemoteFailure(CoachError):
    """Any failure of a remote call that allows degrading to offline mode."""


class TransportError(RemoteFailure):
    """The request never produced an HTTP response (timeout, DNS, refused)."""


class InvalidResponseEnvelope(RemoteFailure):
    """The backend answered 2xx but the body is not the expected envelope."""

    def __init__(self, detail: str = "Invalid response from API") -> None:
        super().__init__(detail)


class BackendError(RemoteFailure):
    """The backend answered with a non-2xx status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"API error ({status}): {body}")
        self.status = status
        self.body = body


class NoContent(RemoteFailure):
    """The envelope held zero usable content items."""

    def __init__(self) -> None:
        super().__init__("No content in response")


class ParseError(RemoteFailure):
    """The text payload could not be decoded into the expected schema."""

    def __init__(self, detail: str, fragment: str = "", path: str = "") -> None:
        super().__init__(f"Parse error: {detail}")
        self.detail = detail
        self.fragment = fragment
        self.path = path
