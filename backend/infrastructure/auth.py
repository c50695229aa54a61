"""
Authentication middleware and utilities for JWT token-based authentication.

SECURITY NOTES:
- Passwords are stored as bcrypt hashes and checked with bcrypt.checkpw
- JWT tokens (HS256) are issued upon successful login
- Tokens are sent via the Authorization header: "Bearer <token>"
- Always use HTTPS in production to protect credentials in transit
- Rate limiting via slowapi to prevent brute force attacks on /auth/login
"""

import json
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from core import get_settings
from domain.exceptions import ConfigurationError

logger = logging.getLogger("Auth")


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    Uses constant-time comparison via bcrypt to prevent timing attacks.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Malformed password hash: {e}")
        return False


def get_jwt_secret() -> str:
    """
    Get the JWT secret key from settings.

    Raises:
        ConfigurationError: If JWT_SECRET is not set
    """
    jwt_secret = get_settings().jwt_secret
    if not jwt_secret:
        logger.error("JWT_SECRET is not set in environment variables!")
        logger.error("Generate one with 'python -c \"import secrets; print(secrets.token_hex(32))\"'")
        raise ConfigurationError("JWT_SECRET is required to issue and verify tokens")
    return jwt_secret


def generate_jwt_token(user_id: str, username: str, expiration_hours: int | None = None) -> str:
    """
    Generate a JWT token for an authenticated user.

    Args:
        user_id: The user's id
        username: The user's name
        expiration_hours: Hours until the token expires (default: settings.jwt_expiration_hours)

    Returns:
        str: Encoded JWT token
    """
    if expiration_hours is None:
        expiration_hours = get_settings().jwt_expiration_hours

    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "username": username,
        "iat": now,
        "exp": now + timedelta(hours=expiration_hours),
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm="HS256")


def validate_jwt_token(token: str) -> dict | None:
    """
    Validate a JWT token and return its payload.

    Returns:
        dict | None: Token payload if valid, None otherwise
    """
    try:
        return jwt.decode(token, get_jwt_secret(), algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token has expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        return None


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token part of an "Authorization: Bearer <token>" header value."""
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        return None
    return parts[1].strip()


class AuthMiddleware:
    """
    Pure ASGI middleware for JWT token authentication.

    Requests without a token get 401; requests with an invalid or expired
    token get 403. The decoded payload is stored on request.state.user.

    Excluded paths (no auth required):
    - /auth/register, /auth/login, /auth/health
    - /docs, /openapi.json, /redoc - API documentation
    - / - root
    """

    EXCLUDED_PATHS = {
        "/",
        "/docs",
        "/openapi.json",
        "/redoc",
        "/auth/register",
        "/auth/login",
        "/auth/health",
    }

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        method = scope["method"]
        headers = dict(scope.get("headers", []))

        if path in self.EXCLUDED_PATHS or method == "OPTIONS":
            await self.app(scope, receive, send)
            return

        token = extract_bearer_token(headers.get(b"authorization", b"").decode("utf-8"))
        if token is None:
            await self._reject(send, headers, 401, "Missing authentication token")
            return

        token_payload = validate_jwt_token(token)
        if not token_payload:
            await self._reject(send, headers, 403, "Invalid or expired authentication token")
            return

        if "state" not in scope:
            scope["state"] = {}
        scope["state"]["user"] = token_payload

        await self.app(scope, receive, send)

    @staticmethod
    async def _reject(send, headers, status_code: int, detail: str) -> None:
        origin = headers.get(b"origin", b"").decode("utf-8")
        response_headers = [
            (b"content-type", b"application/json"),
        ]
        if origin:
            response_headers.extend(
                [
                    (b"access-control-allow-origin", origin.encode()),
                    (b"access-control-allow-credentials", b"true"),
                    (b"access-control-allow-methods", b"*"),
                    (b"access-control-allow-headers", b"*"),
                ]
            )

        body = json.dumps({"detail": detail}).encode("utf-8")
        response_headers.append((b"content-length", str(len(body)).encode()))

        await send(
            {
                "type": "http.response.start",
                "status": status_code,
                "headers": response_headers,
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": body,
            }
        )
