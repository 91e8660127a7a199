"""Domain errors for deltabuild."""


class BuildError(RuntimeError):
    """Raised when the build cannot continue."""

    def __init__(self, message: str, returncode: int = 1):
        super().__init__(message)
        self.returncode = returncode
