"""
Errors raised while compiling a BeFrames job.

Every failure is fatal for the job being compiled: nothing is retried here and
no partial task list is ever returned. Retry, if any, happens when the host
resubmits the job.
"""


class JobCompileError(ValueError):
    """Base exception for all job compilation failures."""

    hint = "Check the job settings."


class UnsupportedFormatError(JobCompileError):
    """Raised when the output format is a video container."""

    hint = "Pick an image-sequence format (PNG, OPEN_EXR, ...) in the scene output settings."

    def __init__(self, image_format: str):
        self.image_format = image_format
        super().__init__(
            f"Video formats are not supported by this job type (image sequences only): {image_format}"
        )


class MissingRequiredSettingError(JobCompileError):
    """Raised when a setting required by the active job type is absent or blank."""

    def __init__(self, key: str, message: str = ""):
        self.key = key
        super().__init__(message or f"Missing required setting: {key}")

    @property
    def hint(self) -> str:
        return f"Set '{self.key}' before submitting."


class InvalidSettingError(JobCompileError):
    """Raised when a setting is present but outside its allowed domain."""


class InvalidChunkSizeError(InvalidSettingError):
    """Raised when chunk_size is not a positive integer."""

    hint = "chunk_size must be >= 1."

    def __init__(self, chunk_size: int):
        self.chunk_size = chunk_size
        super().__init__(f"Invalid chunk size: {chunk_size}")


class MalformedFrameRangeError(JobCompileError):
    """Raised when a frame range expression can't be parsed."""

    hint = "Use frame numbers and ranges, e.g. '47', '1-30', '3, 5-10, 47-327'."

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Malformed frame range {expression!r}: {reason}")
