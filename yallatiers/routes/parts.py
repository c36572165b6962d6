from flask import Blueprint, request

from yallatiers.services import storage
from yallatiers.utils.parsing import parse_int, clean_str, missing_fields
from yallatiers.utils.responses import ok, err

bp = Blueprint("parts", __name__, url_prefix="/api/parts")

PART_REQUIRED = ("name", "description", "conditionRating", "estimatedPrice", "imageUrl",
                 "vehicleType", "year", "make", "model")
VEHICLE_KEYS = ("vehicleType", "year", "make", "model")


@bp.post("")
def create_part():
    d = request.get_json(silent=True) or {}
    miss = missing_fields(d, PART_REQUIRED)
    if miss:
        return err("missing fields: " + ", ".join(miss), 400)
    rating = parse_int(d.get("conditionRating"), minv=0, maxv=100)
    if rating is None:
        return err("conditionRating must be an integer between 0 and 100", 400)

    p = storage.save_part({
        "name": clean_str(d.get("name")),
        "description": clean_str(d.get("description")),
        "condition_rating": rating,
        "estimated_price": clean_str(d.get("estimatedPrice")),
        "image_url": clean_str(d.get("imageUrl")),
        "vehicle_type": clean_str(d.get("vehicleType")),
        "year": clean_str(d.get("year")),
        "make": clean_str(d.get("make")),
        "model": clean_str(d.get("model")),
    })
    return ok(p.to_dict(), 201)


@bp.get("")
def list_parts():
    args = request.args
    miss = missing_fields(args, VEHICLE_KEYS)
    if miss:
        return err("Vehicle information is required (missing: " + ", ".join(miss) + ")", 400)
    parts = storage.get_parts_by_vehicle(*(args.get(k) for k in VEHICLE_KEYS))
    return ok([p.to_dict() for p in parts])


@bp.get("/<int:part_id>")
def get_part(part_id: int):
    p = storage.get_part_by_id(part_id)
    if not p:
        return err("Part not found", 404)
    return ok(p.to_dict())
