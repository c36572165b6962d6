from flask import Blueprint, request, current_app

from yallatiers.services import storage
from yallatiers.utils.parsing import parse_int, clean_str, missing_fields
from yallatiers.utils.responses import ok, err
from yallatiers.utils.session import resolve_user_id

bp = Blueprint("user", __name__, url_prefix="/api/user")

SEARCH_REQUIRED = ("vehicleType", "year", "make", "model", "partSearch")


def _explicit_id(raw):
    """None when absent, False when present but not a positive integer."""
    if raw is None or raw == "":
        return None
    n = parse_int(raw, minv=1)
    return n if n is not None else False


def _acting_user(raw):
    explicit = _explicit_id(raw)
    if explicit is False:
        return None, err("User ID must be a positive integer", 400)
    user_id, error = resolve_user_id(explicit)
    if error:
        body, code = error
        return None, err(body["error"], code)
    return user_id, None


# ---------- Profile ----------
@bp.get("/profile")
def profile():
    user_id = _explicit_id(request.args.get("id"))
    if not user_id:
        return err("User ID is required", 400)
    u = storage.get_user(user_id)
    if not u:
        return err("User not found", 404)
    return ok(u.to_dict())


# ---------- Favorites ----------
@bp.post("/favorites")
def add_favorite():
    d = request.get_json(silent=True) or {}
    user_id, error = _acting_user(d.get("userId"))
    if error:
        return error
    part_id = _explicit_id(d.get("partId"))
    if not part_id:
        return err("User ID and Part ID are required", 400)
    if not storage.get_user(user_id):
        return err("User not found", 404)
    if not storage.get_part_by_id(part_id):
        return err("Part not found", 404)

    fav, created = storage.add_favorite(user_id, part_id)
    return ok(fav.to_dict(), 201 if created else 200)


@bp.get("/favorites")
def list_favorites():
    user_id, error = _acting_user(request.args.get("userId"))
    if error:
        return error
    return ok([p.to_dict() for p in storage.get_user_favorites(user_id)])


@bp.delete("/favorites")
def delete_favorite():
    user_id, error = _acting_user(request.args.get("userId"))
    if error:
        return error
    part_id = _explicit_id(request.args.get("partId"))
    if not part_id:
        return err("User ID and Part ID are required", 400)
    storage.remove_favorite(user_id, part_id)
    return "", 204


# ---------- Search history ----------
@bp.post("/search-history")
def add_search_history():
    d = request.get_json(silent=True) or {}
    user_id, error = _acting_user(d.get("userId"))
    if error:
        return error
    miss = missing_fields(d, SEARCH_REQUIRED)
    if miss:
        return err("missing fields: " + ", ".join(miss), 400)
    if not storage.get_user(user_id):
        return err("User not found", 404)

    h = storage.create_search_history({
        "user_id": user_id,
        "vehicle_type": clean_str(d.get("vehicleType")),
        "year": clean_str(d.get("year")),
        "make": clean_str(d.get("make")),
        "model": clean_str(d.get("model")),
        "mileage": clean_str(d.get("mileage")),
        "part_search": clean_str(d.get("partSearch")),
    })
    current_app.logger.info("saved search id=%s for user=%s", h.id, user_id)
    return ok(h.to_dict(), 201)


@bp.get("/search-history")
def list_search_history():
    user_id, error = _acting_user(request.args.get("userId"))
    if error:
        return error
    return ok([h.to_dict() for h in storage.get_user_search_history(user_id)])
