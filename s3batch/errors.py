"""Error types and remote-store failure classification.

Two families live here:

- S3BatchError and its subclasses: failures raised by this package before
  any I/O (bad command table, unsupported invocation, rejected option).
- ServiceError / RequestFailure / AcceptableError: failures reported by a
  remote-store call during execution. The executor asks is_retryable() and
  is_acceptable() what to do with them.
"""
from typing import Any, Optional, Tuple

RETRYABLE_CODES = ("SlowDown", "SerializationError")
RETRYABLE_REQUEST_CODES = ("InternalError", "SerializationError")
RETRYABLE_STATUS_CODES = (400, 500)


# --- Resolution-time errors ---

class S3BatchError(Exception):
    pass


class CommandTableError(S3BatchError):
    pass


class DuplicateCommandError(CommandTableError):
    pass


class ResolutionError(S3BatchError):
    pass


class UnsupportedInvocationError(ResolutionError):
    def __init__(self, keyword: str, arg_count: int):
        self.keyword = keyword
        self.arg_count = arg_count
        super().__init__(f"unsupported invocation: {keyword!r} with {arg_count} argument(s)")


class OptionNotAcceptedError(ResolutionError):
    def __init__(self, keyword: str, operation: Any, option: Any):
        self.keyword = keyword
        self.operation = operation
        self.option = option
        super().__init__(f"option {option.flag or option.name} is not accepted by {keyword!r} ({operation.name})")


class UnknownOptionError(S3BatchError):
    pass


# --- Remote-store errors ---

class ServiceError(Exception):
    """A structured error returned by the remote store."""

    def __init__(self, code: str, message: str = "", orig: Optional[BaseException] = None):
        self.code = code
        self.message = message
        self.orig = orig
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"{self.code}: {self.message}" if self.message else self.code
        if self.orig is not None:
            text += f"\ncaused by: {self.orig}"
        return text


class RequestFailure(ServiceError):
    """A ServiceError that also carries the HTTP transport layer."""

    def __init__(
        self,
        code: str,
        message: str = "",
        status_code: int = 0,
        request_id: str = "",
        orig: Optional[BaseException] = None,
    ):
        self.status_code = status_code
        self.request_id = request_id
        super().__init__(code, message, orig=orig)

    def _format(self) -> str:
        text = super()._format()
        return f"{text}\n\tstatus code: {self.status_code}, request id: {self.request_id}"


class AcceptableError(Exception):
    """An OK-to-have error, like "cp -n" finding an existing destination.

    Does not count as a failure for the exit code, but is not a success either.
    """


# --- Classification ---

def is_retryable(err: Any) -> Tuple[str, bool]:
    """Return (code, retryable) for an error from a remote-store call."""
    if not isinstance(err, ServiceError):
        return "", False
    code = getattr(err, "code", None)
    if not isinstance(code, str):
        code = ""
    if code in RETRYABLE_CODES:
        return code, True
    if isinstance(err, RequestFailure):
        if code in RETRYABLE_REQUEST_CODES:
            return code, True
        status = getattr(err, "status_code", None)
        if isinstance(status, int) and status in RETRYABLE_STATUS_CODES:
            return f"HTTP{status}", True
    return "", False


def cleanup(err: Any) -> str:
    """Convert a multi-line error message into a single line."""
    if err is None:
        return ""
    s = str(err).replace("\n", " ")
    s = s.replace("\t", " ")
    s = s.replace("  ", " ")
    s = s.replace("  ", " ")
    return s.strip()


def is_acceptable(err: Any) -> Optional[AcceptableError]:
    if isinstance(err, AcceptableError):
        return err
    return None
