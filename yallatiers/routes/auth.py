from flask import Blueprint, request, current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash

from yallatiers.services import storage
from yallatiers.utils.parsing import clean_str, missing_fields, normalize_email
from yallatiers.utils.responses import ok, err
from yallatiers.utils.session import issue_token, current_session

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _with_token(u):
    return {**u.to_dict(), "accessToken": issue_token(u)}


@bp.post("/register")
def register():
    d = request.get_json(silent=True) or {}
    miss = missing_fields(d, ("name", "email", "password"))
    if miss:
        return err("missing fields: " + ", ".join(miss), 400)
    email = normalize_email(d.get("email"))
    if "@" not in email:
        return err("Invalid email address", 400)
    if storage.get_user_by_email(email):
        return err("Email already in use", 400)

    try:
        u = storage.create_user(clean_str(d.get("name")), email, str(d.get("password")))
    except IntegrityError:
        return err("Email already in use", 400)
    current_app.logger.info("registered user id=%s", u.id)
    return ok(_with_token(u), 201)


@bp.post("/login")
def login():
    d = request.get_json(silent=True) or {}
    email = normalize_email(d.get("email"))
    password = d.get("password") or ""
    if not email or not password:
        return err("Email and password are required", 400)

    u = storage.get_user_by_email(email)
    if not u or not check_password_hash(u.password, str(password)):
        current_app.logger.info("failed login for %s", email)
        return err("Invalid email or password", 401)
    return ok(_with_token(u))


@bp.get("/me")
def me():
    sess, error = current_session()
    if error:
        return error
    if sess is None:
        return err("no_token", 401)
    u = storage.get_user(sess.user_id)
    if not u:
        return err("User not found", 404)
    return ok(u.to_dict())
