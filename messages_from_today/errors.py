"""Exception taxonomy shared by every service.

Library code raises these; only the orchestrator and the CLI catch them and
turn them into user-facing notifications.
"""


class MessagesFromTodayError(Exception):
    """Base class for all errors surfaced to the user."""


class ConfigurationError(MessagesFromTodayError):
    """A credential or identifier is missing or invalid; the user must fix settings."""


class AuthenticationError(MessagesFromTodayError):
    """The remote provider rejected the configured credential."""


class ProviderError(MessagesFromTodayError):
    """The AI provider reported an application-level failure."""


class ParseError(MessagesFromTodayError):
    """Model output did not contain a recoverable insight payload."""


class ForwardingError(MessagesFromTodayError):
    """Airtable refused the record or could not be reached."""

    def __init__(self, message: str, status: int | None = None, fields: list[str] | None = None):
        super().__init__(message)
        self.status = status
        self.fields = fields or []
