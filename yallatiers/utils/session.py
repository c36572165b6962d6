from dataclasses import dataclass
from datetime import datetime, timedelta

import jwt
from flask import current_app, request


@dataclass(frozen=True)
class AccountSession:
    """The signed-in account for one request, carried as a bearer token."""
    user_id: int
    name: str
    email: str


def issue_token(user) -> str:
    cfg = current_app.config
    payload = {
        "sub": str(user.id),
        "name": user.name,
        "email": user.email,
        "exp": datetime.utcnow() + timedelta(hours=cfg["JWT_TTL_HOURS"]),
    }
    return jwt.encode(payload, cfg["JWT_SECRET"], algorithm=cfg["JWT_ALGO"])


def decode_token(token: str) -> AccountSession:
    cfg = current_app.config
    payload = jwt.decode(token, cfg["JWT_SECRET"], algorithms=[cfg["JWT_ALGO"]])
    return AccountSession(user_id=int(payload["sub"]), name=payload.get("name", ""),
                          email=payload.get("email", ""))


def current_session():
    """Returns (session, error). Both are None when the request carries no bearer token."""
    auth = request.headers.get("Authorization", "")
    if not auth:
        return None, None
    if not auth.startswith("Bearer "):
        return None, ({"error": "Malformed Authorization header"}, 401)
    try:
        return decode_token(auth.split(" ", 1)[1]), None
    except (jwt.InvalidTokenError, KeyError, ValueError):
        return None, ({"error": "Invalid or expired session"}, 401)


def resolve_user_id(explicit):
    """Picks the acting user id from the session and/or an explicit userId.

    Returns (user_id, error). An explicit id that disagrees with the session is refused.
    """
    sess, error = current_session()
    if error:
        return None, error
    if sess is None:
        if explicit is None:
            return None, ({"error": "User ID is required"}, 400)
        return explicit, None
    if explicit is not None and explicit != sess.user_id:
        return None, ({"error": "forbidden"}, 403)
    return sess.user_id, None
