class SandboxError(Exception):
    """Base class for errors raised by the execution core."""


class ValidationError(SandboxError):
    """The request was rejected before any file was written or process spawned."""


class MissingFieldError(ValidationError):
    def __init__(self, message: str = "Code and language are required"):
        super().__init__(message)


class UnsupportedLanguageError(ValidationError):
    def __init__(self, language_id: str | None):
        self.language_id = language_id
        super().__init__("Unsupported language")
