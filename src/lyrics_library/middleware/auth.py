"""
JWT Cookie Authentication Middleware

Verifies the session token carried in a cookie. Tokens are issued by an
external sign-on service; this middleware only checks them.

    - no cookie:            request passes through anonymously
    - token fails to verify: 401 INVALID_TOKEN
    - token verifies:        ``request.state.uid`` is set and ``uid`` bound in the log context
"""

import jwt
import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from lyrics_library.errors import AuthenticationError
from lyrics_library.errors.handlers import error_body

logger = structlog.get_logger(__name__)


class JWTCookieAuthMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        secret_key: str,
        algorithm: str = "HS256",
        cookie_name: str = "jwt",
    ):
        super().__init__(app)
        if not secret_key:
            raise ValueError("secret_key is required for JWT authentication")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.cookie_name = cookie_name

    def _verify(self, token: str) -> str:
        """Decode the token and return its user id.

        Raises:
            AuthenticationError: The token is expired, tampered with or carries no user id
        """
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("invalid token") from exc

        uid = claims.get("uid", claims.get("sub"))
        if uid is None or uid == "":
            raise AuthenticationError("token carries no user id")
        return str(uid)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.uid = None
        token = request.cookies.get(self.cookie_name)
        if not token:
            return await call_next(request)

        try:
            uid = self._verify(token)
        except AuthenticationError as exc:
            logger.warning("token_rejected", path=request.url.path, reason=str(exc))
            return JSONResponse(status_code=exc.status_code, content=error_body(exc))

        request.state.uid = uid
        structlog.contextvars.bind_contextvars(uid=uid)
        return await call_next(request)
