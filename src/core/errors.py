class GainsTraceError(Exception):
    """Base class for every error raised by this service."""


class DataSourceError(GainsTraceError):
    """The upstream brokerage API failed or returned something unusable."""


class AuthenticationError(DataSourceError):
    """The upstream brokerage API rejected the session credentials."""


class AccessDeniedError(GainsTraceError):
    """The session is not allowed to read the requested client."""


class ClientNotSpecifiedError(GainsTraceError):
    """No client id was given and none is bound to the session."""
