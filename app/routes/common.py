"""Shared router helpers: service error mapping and common parameters."""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import HTTPException, Path, Query, status

from app.auth.jwt import AuthError
from app.schemas.common import MAX_IDENTIFIER
from app.services.errors import ConflictError, InvalidCredentialsError

logger = structlog.get_logger("farmhub.routes")

RowId = Annotated[int, Path(gt=0, le=MAX_IDENTIFIER, description="Row identifier")]
# (page - 1) * limit must stay inside a BIGINT OFFSET.
PageNumber = Annotated[int, Query(ge=1, le=MAX_IDENTIFIER // 100)]
PageLimit = Annotated[int, Query(ge=1, le=100)]


def map_service_error(exc: Exception, failure_message: str) -> HTTPException:
	"""Translate a service exception into the single response for this request.

	Unanticipated failures are logged with their traceback and answered with
	``failure_message`` only.
	"""
	if isinstance(exc, HTTPException):
		return exc
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ConflictError):
		return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	if isinstance(exc, AuthError):
		return HTTPException(
			status_code=exc.status_code,
			detail={"error": exc.code, "message": exc.detail},
		)
	if isinstance(exc, InvalidCredentialsError):
		return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
	if isinstance(exc, PermissionError):
		return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))

	logger.exception("service_failure", failure=failure_message, error=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail=failure_message,
	)
