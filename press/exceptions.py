class PressError(Exception):
    """Base class for site build and deploy failures."""


class BuildError(PressError):
    """Raised when the static-site generator fails or cannot be started."""

    def __init__(self, message, returncode=None, stdout="", stderr=""):
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class PublishError(PressError):
    """Raised when the output directory cannot be published to the hosting branch."""
