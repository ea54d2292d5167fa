"""
Gateway error taxonomy and the FastAPI handlers that render it.

Registry and accessor code raises these unchanged; only the HTTP layer
turns them into responses.
"""
import logging
from typing import Any, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base class for errors surfaced to API callers."""

    kind = "GatewayError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "kind": self.kind}


class UnconfiguredDatabase(GatewayError):
    """Logical database name has no configured URI."""

    kind = "UnconfiguredDatabase"

    def __init__(self, database: str):
        super().__init__(f"No URI mapped for database: {database}")
        self.database = database


class UnknownCollection(GatewayError):
    """Collection name has no registered structural contract."""

    kind = "UnknownCollection"

    def __init__(self, collection: str):
        super().__init__(f"No schema defined for collection: {collection}")
        self.collection = collection


class DatabaseConnectionError(GatewayError, ConnectionError):
    """Database endpoint could not be reached or authenticated."""

    kind = "ConnectionError"

    def __init__(self, database: str, reason: str = "server unreachable"):
        super().__init__(f"Could not connect to database '{database}': {reason}")
        self.database = database


class DocumentValidationError(GatewayError):
    """A record does not satisfy its collection's structural contract."""

    kind = "ValidationError"

    def __init__(
        self,
        collection: str,
        errors: list[dict[str, Any]],
        index: Optional[int] = None,
    ):
        fields = ", ".join(f"{e['field']}: {e['message']}" for e in errors)
        where = f" (record {index})" if index is not None else ""
        super().__init__(f"{collection} validation failed{where}: {fields}")
        self.collection = collection
        self.errors = errors
        self.index = index

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        if self.index is not None:
            body["index"] = self.index
        return body


class DocumentNotFound(GatewayError):
    """No document with the requested identifier."""

    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, document_id: str):
        super().__init__(f"Document with ID {document_id} not found.")
        self.document_id = document_id


class BadRequest(GatewayError):
    """Request body is missing a required field or is ambiguous."""

    kind = "BadRequest"
    status_code = status.HTTP_400_BAD_REQUEST


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render a GatewayError as a structured JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    """Render driver errors without leaking connection details."""
    logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database operation failed", "kind": "DatabaseError"},
    )


def _describe_request_error(error: dict[str, Any]) -> str:
    if error.get("type") == "json_invalid":
        return "invalid JSON"
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render a malformed request body as a BadRequest."""
    problems = "; ".join(_describe_request_error(e) for e in exc.errors())
    error = BadRequest(f"Malformed request body: {problems}")
    logger.info(f"{request.method} {request.url.path} rejected: {error.message}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
