"""
Error taxonomy and API error translation for RepoCloner.
"""

import functools
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar

import httpx

from repocloner.infrastructure.logger import logger


T = TypeVar("T")


####
##      EXCEPTIONS
#####
class ClonerError(Exception):
    """Base class for every error raised by RepoCloner."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message} (Original: {self.original_error})"
        return self.message


class TransportError(ClonerError):
    """The repository listing call failed. Fatal to the whole run."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, original_error)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """GitHub rejected the supplied credentials."""


class RateLimitError(TransportError):
    """GitHub API rate limit is exhausted."""


class CloneError(ClonerError):
    """One clone attempt failed. Recoverable through retry."""

    def __init__(self, exit_code: int, stderr: str = ""):
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"Git clone failed with exit code {exit_code}."
        if stderr.strip():
            message += f" Error: {stderr.strip()}"
        super().__init__(message)


class FilesystemError(ClonerError):
    """The destination root could not be prepared. Fatal to the whole run."""

    def __init__(self, path: Path, original_error: Optional[Exception] = None):
        self.path = path
        super().__init__(f"Cannot create destination directory {path}", original_error)


class ConfigurationError(ClonerError):
    """A setting from the environment is not usable. Fatal before the run starts."""

    def __init__(self, name: str, value: str, original_error: Optional[Exception] = None):
        self.name = name
        self.value = value
        super().__init__(
            f"{name} must be a positive integer, got {value!r}", original_error
        )


####
##      HELPERS
#####
def redact(text: str, secrets: Iterable[Optional[str]]) -> str:
    """Replace every non-empty secret in ``text`` with ``***``."""

    for secret in secrets:
        if secret:
            text = text.replace(secret, "***")
    return text


def _error_from_response(response: httpx.Response, error: Exception) -> TransportError:
    status = response.status_code
    try:
        detail = response.json().get("message") or response.reason_phrase
    except (ValueError, AttributeError):
        detail = response.reason_phrase

    if status in (403, 429) and response.headers.get("X-RateLimit-Remaining") == "0":
        return RateLimitError(f"GitHub API rate limit exceeded: {detail}", error, status)
    if status in (401, 403):
        return AuthenticationError(f"GitHub authentication failed: {detail}", error, status)
    return TransportError(f"GitHub API returned HTTP {status}: {detail}", error, status)


def handle_api_error(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Translate httpx failures raised by an async API call into TransportError."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)

        except ClonerError:
            raise

        except httpx.HTTPStatusError as e:
            error = _error_from_response(e.response, e)
            logger.error(error.message)
            raise error from e

        except httpx.RequestError as e:
            logger.error(f"Request to GitHub failed: {e}")
            raise TransportError("Could not reach the GitHub API", e) from e

        except ValueError as e:
            logger.error(f"Malformed response from GitHub: {e}")
            raise TransportError("Malformed response from the GitHub API", e) from e

    return wrapper


__all__ = [
    "ClonerError",
    "TransportError",
    "AuthenticationError",
    "RateLimitError",
    "CloneError",
    "FilesystemError",
    "ConfigurationError",
    "redact",
    "handle_api_error",
]
