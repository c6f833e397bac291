class SigningError(Exception):
    """Base class for every failure surfaced to the session or the CLI."""


class ConfigurationError(SigningError):
    pass


class DocumentIOError(SigningError):
    pass


class PersistenceError(SigningError):
    pass


class OverlayError(SigningError):
    def __init__(self, step: str, cause: Exception):
        self.step = step
        self.cause = cause
        super().__init__(f"failed to add {step}: {cause}")
