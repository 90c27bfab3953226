"""JWT token creation and validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from app.config import get_settings

ACCESS_TOKEN_TYPE = "access"


@dataclass(slots=True)
class AuthError(Exception):
	"""Structured authentication error for consistent mapping at the edge."""

	code: str
	detail: str
	status_code: int = 401


def _settings() -> Any:
	return get_settings()


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
	settings = _settings()
	ttl = expires_minutes or settings.jwt_access_token_expire_minutes
	now = datetime.now(UTC)
	claims: dict[str, Any] = {
		"sub": str(user_id),
		"typ": ACCESS_TOKEN_TYPE,
		"iat": int(now.timestamp()),
		"exp": int((now + timedelta(minutes=ttl)).timestamp()),
	}
	return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
	settings = _settings()
	try:
		payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
	except JWTError as exc:
		raise AuthError(code="token_invalid", detail="Invalid or expired token.") from exc

	subject = payload.get("sub")
	if not isinstance(subject, str) or not subject:
		raise AuthError(code="token_invalid", detail="Token subject is missing")

	if payload.get("typ") != ACCESS_TOKEN_TYPE:
		raise AuthError(code="token_type_invalid", detail="Expected access token")

	exp_raw = payload.get("exp")
	if not isinstance(exp_raw, int):
		raise AuthError(code="token_invalid", detail="Token expiration is missing")
	if datetime.now(UTC).timestamp() >= exp_raw:
		raise AuthError(code="token_expired", detail="Invalid or expired token.")

	return payload


def user_id_from_token(token: str) -> int:
	"""Decode ``token`` and return its subject as a user id."""
	payload = decode_token(token)
	try:
		user_id = int(payload["sub"])
	except ValueError as exc:
		raise AuthError(code="token_invalid", detail="Token subject is invalid") from exc
	if user_id <= 0:
		raise AuthError(code="token_invalid", detail="Token subject is invalid")
	return user_id
