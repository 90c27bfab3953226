"""Service-level exceptions and store error classification.

Services raise these (plus ``LookupError``, ``ValueError`` and
``PermissionError``); routers translate them into HTTP responses.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


class ConflictError(Exception):
	"""A write would break a uniqueness rule or orphan dependent rows."""


class MissingReferenceError(ValueError):
	"""A foreign-key field points at a row that does not exist."""


class InvalidCredentialsError(Exception):
	"""Email/password (or current password) did not match."""


def integrity_sqlstate(exc: IntegrityError) -> str | None:
	"""Return the PostgreSQL SQLSTATE carried by a driver integrity error."""
	orig = exc.orig
	for candidate in (orig, getattr(orig, "__cause__", None)):
		code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
		if code:
			return str(code)
	return None
