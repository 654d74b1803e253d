# core/errors.py

"""
Lifecycle error kinds.

Services raise these; the HTTP boundary (exception handlers registered in
main.create_app) turns them into JSON responses with the message as-is.
"""


class LifecycleError(Exception):
    """Base class for every error a lifecycle operation can surface."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class AuthorizationError(LifecycleError):
    """Caller does not own, or may not act on, the resource."""

    status_code = 403


class NotFoundError(LifecycleError):
    """Referenced tenancy / inspection / room / intention is absent."""

    status_code = 404


class ValidationError(LifecycleError):
    """Missing or malformed input (damage description, checklist item, ...)."""

    status_code = 422


class StateError(LifecycleError):
    """Attempted mutation on a finalized or terminal record, or an illegal transition."""

    status_code = 409


class UploadError(LifecycleError):
    """Photo compression or storage write failed."""

    status_code = 400


class RemoteError(LifecycleError):
    """Opaque failure from the relational store or storage layer."""

    status_code = 502

    @classmethod
    def from_exception(cls, error: Exception) -> "RemoteError":
        return cls(extract_supabase_error(error))


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Storage errors
      • Generic Python exceptions
    """

    # Case 1: Supabase Auth / PostgREST errors carry .message
    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2: errors with args (common)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 3: Plain string fallback
    try:
        return str(error)
    except Exception:
        return "Unknown Supabase error"
