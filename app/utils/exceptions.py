"""
Error taxonomy for the movie catalog.

Services raise these; handlers in app.main turn them into JSON responses.
"""


class MovieNotFound(Exception):
    """Lookup, update or delete target is absent"""

    message = "Movie not found"


class StoreFailure(Exception):
    """
    Persistence or filesystem failure.

    `message` is safe to show to clients. The original exception is kept on
    `__cause__` and only ever logged.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidUpload(Exception):
    """Upload request rejected before anything is written"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
