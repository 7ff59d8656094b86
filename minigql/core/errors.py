"""Error types raised while building schemas, parsing and executing queries.

Every failure surfaces as a GraphQLError (or one of its subclasses). The
executor never returns partial data: the first error aborts the request and
the host turns it into a response with format_response().
"""

import traceback
from typing import Any

from pydantic import BaseModel

from ..config import get_settings


class DebugInfo(BaseModel):
    """Location details attached to an error payload in debug mode."""
    file: str | None = None
    line: int | None = None
    trace: list[str] = []


class ErrorPayload(BaseModel):
    """Wire shape of a single error: {message, extensions?, debug?}."""
    message: str
    extensions: dict[str, Any] | None = None
    debug: DebugInfo | None = None


class GraphQLError(Exception):
    """Base exception for every error produced by minigql."""

    def __init__(
        self,
        message: str,
        extensions: dict[str, Any] | None = None,
        original_error: BaseException | None = None,
    ):
        self.message = message
        self.extensions = extensions or {}
        self.original_error = original_error
        super().__init__(message)

    def to_dict(self, debug: bool | None = None) -> dict[str, Any]:
        """Serialize the error to its wire format.

        Args:
            debug: Include file, line and trace details. Defaults to the
                MINIGQL_DEBUG setting.
        """
        if debug is None:
            debug = get_settings().debug

        payload = ErrorPayload(
            message=self.message,
            extensions=self.extensions or None,
            debug=self._debug_info() if debug else None,
        )
        return payload.model_dump(exclude_none=True)

    def _debug_info(self) -> DebugInfo:
        frames = traceback.extract_tb(self.__traceback__)
        if not frames:
            return DebugInfo()
        last = frames[-1]
        return DebugInfo(
            file=last.filename,
            line=last.lineno,
            trace=[line.rstrip("\n") for line in traceback.format_list(frames)],
        )


class SchemaValidationError(GraphQLError):
    """Raised when a schema is assembled from the wrong kinds of types."""


class QuerySyntaxError(GraphQLError):
    """Raised when query text cannot be parsed."""


class ExecutionError(GraphQLError):
    """Raised for lookup failures during execution (unknown fields, roots)."""


class ResolverError(GraphQLError):
    """Wraps a foreign exception raised while resolving a field."""


class CoercionError(GraphQLError):
    """Raised when a resolved value does not fit its declared type."""


def format_response(
    data: dict[str, Any] | None = None,
    error: GraphQLError | None = None,
    debug: bool | None = None,
) -> dict[str, Any]:
    """Build a response body holding either data or a single error."""
    if error is not None:
        return {"errors": [error.to_dict(debug=debug)]}
    return {"data": data}
