from flask import Blueprint, request, session

from yallatiers.services import vpic
from yallatiers.utils.parsing import missing_fields
from yallatiers.utils.responses import ok, err

bp = Blueprint("vehicle", __name__, url_prefix="/api/vehicle")

LAST_VEHICLE_KEY = "last_vehicle"


@bp.get("/makes")
def makes():
    args = request.args
    if missing_fields(args, ("vehicleType", "year")):
        return err("Vehicle type and year are required", 400)
    return ok(vpic.get_makes(args["vehicleType"].strip(), args["year"].strip()))


@bp.get("/models")
def models():
    args = request.args
    if missing_fields(args, ("vehicleType", "year", "make")):
        return err("Vehicle type, year, and make are required", 400)
    return ok(vpic.get_models(args["vehicleType"].strip(), args["year"].strip(), args["make"].strip()))


@bp.get("/last")
def last_vehicle():
    # prefill for the analysis view; written by /api/products/search
    data = session.get(LAST_VEHICLE_KEY)
    if not data:
        return "", 204
    return ok(data)
