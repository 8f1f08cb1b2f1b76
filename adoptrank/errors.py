from __future__ import annotations


class AdoptRankError(Exception):
    """Base class for every error raised by the engine."""


class ClientError(AdoptRankError):
    """The caller supplied bad input; nothing was computed."""


class MissingRequiredParameter(ClientError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required query parameter: {name}")
        self.name = name


class InvalidParameter(ClientError):
    def __init__(self, name: str, value: object) -> None:
        super().__init__(f"Invalid or missing '{name}' query parameter: {value!r}")
        self.name = name
        self.value = value


class UpstreamUnavailable(AdoptRankError):
    """The backing data source could not be read."""


def require_param(name: str, value: str | None) -> str:
    """Return *value* stripped, or raise if it is absent or blank."""
    if value is None or not str(value).strip():
        raise MissingRequiredParameter(name)
    return str(value).strip()
