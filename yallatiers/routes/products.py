from flask import Blueprint, request, session, current_app

from yallatiers.routes.vehicle import LAST_VEHICLE_KEY
from yallatiers.services import recommender
from yallatiers.utils.parsing import missing_fields
from yallatiers.utils.responses import ok, err

bp = Blueprint("products", __name__, url_prefix="/api/products")


@bp.post("/search")
def search():
    d = request.get_json(silent=True) or {}
    miss = missing_fields(d, recommender.REQUIRED_FIELDS)
    if miss:
        return err("missing fields: " + ", ".join(miss), 400)

    s = recommender.normalize(d)
    session[LAST_VEHICLE_KEY] = {
        "type": s["vehicleType"],
        "year": s["year"],
        "make": s["make"],
        "model": s["model"],
        "mileage": f"{s['mileage']} miles",
    }

    results, source = recommender.recommend(s)
    current_app.logger.info("product search %r -> %d results (%s)", s["partSearch"], len(results), source)
    return ok(results)
