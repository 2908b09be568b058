"""Provider error type shared by the HTTP client and payload decoders."""


class ProviderError(Exception):
    """Weather or geocoding provider failure.

    The message is human readable and is shown to the user verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
