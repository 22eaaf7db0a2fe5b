from functools import wraps
from flask import request, g
from app.exceptions import UnauthorizedError, ForbiddenError
from app.auth.permissions import role_has_scope
from .jwt import decode_token, TokenError
from models import db
from models.user import User


def auth_required(func):
    """Resolve the calling identity from the bearer token on every request."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        auth = request.headers.get("Authorization", "")
        if not auth:
            raise UnauthorizedError("Auth header missing")
        token = auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth
        try:
            payload = decode_token(token.strip(), expected_type="access")
        except TokenError as e:
            raise UnauthorizedError(str(e)) from e

        user = db.session.get(User, payload["user_id"])
        if not user:
            raise UnauthorizedError("Unknown identity")
        if user.status != "active":
            raise ForbiddenError("Account not active")

        g.user_id = user.id
        g.role = user.role
        g.token_payload = payload
        request.user = user
        return func(*args, **kwargs)

    return wrapper


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def role_required(required):
    """Authorize based on user role or scoped action (``"merchant:toggle_store"``)."""
    required_set = _to_set(required)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            # the stored role wins over the claim in the token
            role = getattr(getattr(request, "user", None), "role", None) or getattr(g, "role", None)
            if not role:
                raise ForbiddenError("Role missing")
            for entry in required_set:
                if ":" in entry:
                    r, action = entry.split(":", 1)
                    if role == r and role_has_scope(role, action):
                        break
                else:
                    if role == entry:
                        break
            else:
                raise ForbiddenError()
            return fn(*args, **kwargs)

        return wrapper

    return decorator
