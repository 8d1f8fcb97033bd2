"""Errors raised by the discovery pipeline."""


class NotASpecDocument(ValueError):
    """The file is readable but is neither an OpenAPI 3.x nor a Swagger 2.0 document."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"{path} is not a valid OpenAPI 3.x/3.1 or Swagger 2.0 document"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class WalkError(OSError):
    """The discovery root itself could not be traversed."""

    def __init__(self, root: str, cause: Exception | None = None):
        self.root = root
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"error walking directory {root}{detail}")
