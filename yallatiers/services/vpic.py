"""Thin client over the NHTSA vPIC vehicle-data API.

Lookups never raise: any upstream failure falls back to fixed lists.
"""
import logging
from urllib.parse import quote

import requests
from flask import current_app

logger = logging.getLogger(__name__)

FALLBACK_MAKES = ["Toyota", "Honda", "Ford", "Chevrolet", "BMW", "Mercedes-Benz", "Audi", "Nissan"]
FALLBACK_MODELS = {
    "Toyota": ["Camry", "Corolla", "RAV4", "Highlander", "Tacoma"],
    "Honda": ["Civic", "Accord", "CR-V", "Pilot", "Odyssey"],
    "Ford": ["F-150", "Mustang", "Explorer", "Escape", "Focus"],
}
GENERIC_MODELS = ["Model 1", "Model 2", "Model 3", "Model 4", "Model 5"]


def _seg(v) -> str:
    return quote(str(v), safe="")


def _fetch_results(path: str, params: dict):
    cfg = current_app.config
    r = requests.get(f"{cfg['VPIC_BASE_URL']}/{path}", params=params, timeout=cfg["VPIC_TIMEOUT"])
    r.raise_for_status()
    body = r.json()
    results = body.get("Results") if isinstance(body, dict) else None
    return results or []


def get_makes(vehicle_type: str, year: str):
    try:
        results = _fetch_results(f"GetMakesForVehicleType/{_seg(vehicle_type)}",
                                 {"format": "json", "modelYear": year})
    except (requests.RequestException, ValueError) as e:
        logger.warning("vPIC makes lookup failed (%s %s): %s", vehicle_type, year, e)
        return list(FALLBACK_MAKES)
    return [r["MakeName"] for r in results if isinstance(r, dict) and r.get("MakeName")]


def get_models(vehicle_type: str, year: str, make: str):
    path = (f"GetModelsForMakeYear/make/{_seg(make)}/modelyear/{_seg(year)}"
            f"/vehicleType/{_seg(vehicle_type)}")
    try:
        results = _fetch_results(path, {"format": "json"})
    except (requests.RequestException, ValueError) as e:
        logger.warning("vPIC models lookup failed (%s %s %s): %s", vehicle_type, year, make, e)
        return list(FALLBACK_MODELS.get(make, GENERIC_MODELS))
    return [r["Model_Name"] for r in results if isinstance(r, dict) and r.get("Model_Name")]
