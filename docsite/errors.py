"""Error kinds raised while building the content model."""

from typing import Optional


class ContentError(Exception):
    """Base class for every failure of a parse cycle."""


class MissingContentRoot(ContentError):
    def __init__(self, root: str) -> None:
        super().__init__(f"content directory is missing: {root}")
        self.root = root


class FileReadFailure(ContentError):
    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{path} {cause}" if cause else path)
        self.path = path
        self.cause = cause


class DecodeFailure(ContentError):
    """A content file could not be decoded into its record type.

    The message keeps the ``"<path> <reason>"`` shape so authors can find
    the offending file straight from the log line.
    """

    def __init__(self, path: str, cause: object) -> None:
        super().__init__(f"{path} {cause}")
        self.path = path
        self.cause = cause


class ReloadAborted(ContentError):
    """A reload failed; the previously published model stays in effect."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause))
        self.cause = cause
