"""Persistence gateway: plain CRUD over the four record kinds.

Each write commits on its own; nothing here spans more than one entity write.
"""
import logging

from werkzeug.security import generate_password_hash

from yallatiers.extensions import db
from yallatiers.models import User, SearchHistory, Part, Favorite
from yallatiers.utils.parsing import normalize_email
from yallatiers.utils.responses import commit_or_rollback

logger = logging.getLogger(__name__)


# ---------- Users ----------
def get_user(user_id: int):
    return db.session.get(User, user_id)


def get_user_by_email(email: str):
    email = normalize_email(email)
    if not email:
        return None
    return User.query.filter_by(email=email).first()


def create_user(name: str, email: str, password: str) -> User:
    u = User(
        name=name.strip(),
        email=normalize_email(email),
        password=generate_password_hash(password),
    )
    db.session.add(u)
    commit_or_rollback()
    logger.info("created user id=%s", u.id)
    return u


# ---------- Search history ----------
def create_search_history(data: dict) -> SearchHistory:
    h = SearchHistory(
        user_id=data["user_id"],
        vehicle_type=data["vehicle_type"],
        year=str(data["year"]),
        make=data["make"],
        model=data["model"],
        mileage=str(data["mileage"]) if data.get("mileage") not in (None, "") else None,
        part_search=data["part_search"],
    )
    db.session.add(h)
    commit_or_rollback()
    return h


def get_user_search_history(user_id: int):
    return (SearchHistory.query.filter_by(user_id=user_id)
            .order_by(SearchHistory.created_at.asc(), SearchHistory.id.asc()).all())


# ---------- Parts ----------
def save_part(data: dict) -> Part:
    p = Part(
        name=data["name"],
        description=data["description"],
        condition_rating=int(data["condition_rating"]),
        estimated_price=data["estimated_price"],
        image_url=data["image_url"],
        vehicle_type=data["vehicle_type"],
        year=str(data["year"]),
        make=data["make"],
        model=data["model"],
    )
    db.session.add(p)
    commit_or_rollback()
    return p


def get_part_by_id(part_id: int):
    return db.session.get(Part, part_id)


def get_parts_by_vehicle(vehicle_type: str, year: str, make: str, model: str):
    return (Part.query
            .filter(Part.vehicle_type == vehicle_type,
                    Part.year == str(year),
                    Part.make == make,
                    Part.model == model)
            .order_by(Part.id.asc()).all())


# ---------- Favorites ----------
def find_favorite(user_id: int, part_id: int):
    return Favorite.query.filter_by(user_id=user_id, part_id=part_id).first()


def add_favorite(user_id: int, part_id: int):
    """Returns (favorite, created). Adding a pair that already exists is a no-op."""
    existing = find_favorite(user_id, part_id)
    if existing:
        return existing, False
    f = Favorite(user_id=user_id, part_id=part_id)
    db.session.add(f)
    commit_or_rollback()
    return f, True


def remove_favorite(user_id: int, part_id: int) -> int:
    n = Favorite.query.filter_by(user_id=user_id, part_id=part_id).delete(synchronize_session=False)
    commit_or_rollback()
    return n


def get_user_favorites(user_id: int):
    return (Part.query
            .join(Favorite, Favorite.part_id == Part.id)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.asc(), Favorite.id.asc()).all())
