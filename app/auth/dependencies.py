"""Authentication dependencies: bearer token resolution and password hashing."""

from __future__ import annotations

from fastapi import HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from app.auth.jwt import AuthError, user_id_from_token
from app.config import get_settings

bearer_scheme = HTTPBearer(auto_error=False)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plaintext: str) -> str:
	return pwd_context.hash(plaintext)


def verify_password(plaintext: str, hashed: str) -> bool:
	try:
		return pwd_context.verify(plaintext, hashed)
	except ValueError:
		return False


def _raise_auth(exc: AuthError) -> HTTPException:
	return HTTPException(
		status_code=exc.status_code,
		detail={"error": exc.code, "message": exc.detail},
		headers={"WWW-Authenticate": "Bearer"},
	)


def _resolve_user_id(credentials: HTTPAuthorizationCredentials | None) -> int:
	if credentials is None or credentials.scheme.lower() != "bearer":
		raise _raise_auth(AuthError(code="auth_required", detail="No token or invalid format."))
	try:
		return user_id_from_token(credentials.credentials)
	except AuthError as exc:
		raise _raise_auth(exc) from exc


async def get_current_user_id(request: Request) -> int:
	"""Verify the bearer token and return the user id it was issued for."""
	credentials = await bearer_scheme(request)
	user_id = _resolve_user_id(credentials)
	request.state.user_id = user_id
	return user_id


async def entity_access(request: Request) -> int | None:
	"""Gate for entity routers; enforces a bearer token only when configured to."""
	if not get_settings().entity_routes_require_auth:
		return None
	return await get_current_user_id(request)
