"""Structured errors raised by the cover letter pipeline."""

from typing import Dict, Optional


class PipelineError(Exception):
    """Base error carrying a diagnostic log line, a status and a user message.

    ``log`` is meant for server logs, ``message`` is safe to show to callers.
    """

    status = 500
    user_message = "An error occurred while generating the cover letter"

    def __init__(self, log: str, status: Optional[int] = None, user_message: Optional[str] = None):
        super().__init__(log)
        self.log = log
        if status is not None:
            self.status = status
        if user_message is not None:
            self.user_message = user_message

    @property
    def message(self) -> Dict[str, str]:
        return {"err": self.user_message}

    def to_dict(self) -> dict:
        """Serialize for the downstream error handler."""
        return {"log": self.log, "status": self.status, "message": self.message}


class MissingInput(PipelineError):
    """The job description was absent or empty."""

    status = 400
    user_message = "An error occurred before querying OpenAI"


class ResumeReadError(PipelineError):
    """The resume document could not be located or opened."""

    user_message = "An error occurred while reading the resume"


class ResumeParseError(PipelineError):
    """The resume document could not be decoded into text."""

    user_message = "An error occurred while reading the resume"


class ModelInvocationError(PipelineError):
    """The model service reported a failure (network, auth, quota, timeout)."""

    status = 502
    user_message = "An error occurred while querying OpenAI"


class EmptyModelResponse(PipelineError):
    """The model service returned no usable text."""

    status = 502
    user_message = "An error occurred while querying OpenAI"


class CacheWriteError(PipelineError):
    """Persisting the cover letter cache failed."""

    user_message = "An error occurred while saving the cover letter"


class CacheCorruptError(PipelineError):
    """The cache file exists but is not a well-formed mapping."""

    user_message = "An error occurred while saving the cover letter"
