"""Recommendation requester.

Builds a prompt from the vehicle + part query, asks the completion API for three
parts as JSON, and falls back to template results whenever the call or the parse
fails. The fallback is a pure function of the inputs.
"""
import json
import logging
import re

from flask import current_app
from openai import OpenAI, OpenAIError

from yallatiers.utils.parsing import clean_str, leading_int

logger = logging.getLogger(__name__)

RESULT_COUNT = 3
DEFAULT_RATING = 75

SYSTEM_PROMPT = "You are an automotive parts expert that responds only with JSON."

STOCK_IMAGES = [
    "https://images.unsplash.com/photo-1486262715619-67b85e0b08d3?ixlib=rb-1.2.1&auto=format&fit=crop&w=1350&q=80",
    "https://images.unsplash.com/photo-1492144534655-ae79c964c9d7?ixlib=rb-1.2.1&auto=format&fit=crop&w=1350&q=80",
    "https://images.unsplash.com/photo-1609752788425-2b8696381d95?ixlib=rb-1.2.1&auto=format&fit=crop&w=1350&q=80",
]

SEARCH_FIELDS = ("vehicleType", "year", "make", "model", "mileage", "partSearch")
REQUIRED_FIELDS = ("vehicleType", "year", "make", "model", "partSearch")


def normalize(payload: dict) -> dict:
    return {k: clean_str(payload.get(k)) for k in SEARCH_FIELDS}


def build_prompt(s: dict) -> str:
    return (
        "You are an automotive parts expert. Please generate detailed information for the "
        "following automotive part search:\n\n"
        "Vehicle Details:\n"
        f"- Type: {s['vehicleType']}\n"
        f"- Year: {s['year']}\n"
        f"- Make: {s['make']}\n"
        f"- Model: {s['model']}\n"
        f"- Mileage/Hours: {s['mileage']}\n\n"
        f"Part/Product Searched: {s['partSearch']}\n\n"
        f"For each result (generate exactly {RESULT_COUNT} results), provide:\n"
        "1. Product name\n"
        "2. Detailed description including compatibility and features\n"
        "3. Condition rating as a percentage (between 50% and 98%)\n"
        "4. Estimated price in USD\n\n"
        "Format your response as JSON with this structure:\n"
        "[\n"
        "  {\n"
        '    "id": "unique-id",\n'
        '    "name": "Product Name",\n'
        '    "description": "Detailed product description",\n'
        '    "conditionRating": 85,\n'
        '    "estimatedPrice": "$XX.XX",\n'
        '    "imageUrl": "https://images.unsplash.com/photo-URL"\n'
        "  }\n"
        "]\n\n"
        "Only return the JSON array with no additional text or commentary."
    )


# ---------- Completion call ----------
def _client() -> OpenAI:
    cfg = current_app.config
    key = cfg.get("OPENROUTER_API_KEY")
    if not key:
        raise RuntimeError("openrouter_not_configured")
    kwargs = dict(
        api_key=key,
        base_url=cfg["OPENROUTER_BASE_URL"],
        max_retries=0,
        default_headers={"HTTP-Referer": cfg["APP_REFERER"], "X-Title": cfg["APP_TITLE"]},
    )
    if cfg.get("OPENROUTER_TIMEOUT"):
        kwargs["timeout"] = cfg["OPENROUTER_TIMEOUT"]
    return OpenAI(**kwargs)


def call_completion(prompt: str, client=None) -> str:
    client = client or _client()
    r = client.chat.completions.create(
        model=current_app.config["OPENROUTER_MODEL"],
        messages=[{"role": "system", "content": SYSTEM_PROMPT},
                  {"role": "user", "content": prompt}],
    )
    choices = getattr(r, "choices", None) or []
    message = getattr(choices[0], "message", None) if choices else None
    content = getattr(message, "content", None)
    if not isinstance(content, str) or not content.strip():
        raise ValueError("empty completion")
    return content


# ---------- Parsing ----------
def _strip_fence(txt: str) -> str:
    m = re.fullmatch(r"\s*```(?:json)?\s*(.*?)\s*```\s*", txt, flags=re.S)
    return m.group(1) if m else txt.strip()


def coerce_rating(v) -> int:
    if isinstance(v, bool):
        n = DEFAULT_RATING
    elif isinstance(v, (int, float)):
        try:
            n = int(v)
        except (OverflowError, ValueError):  # inf / nan
            n = DEFAULT_RATING
    else:
        n = leading_int(v, DEFAULT_RATING)
    return max(0, min(100, n))


def parse_results(text: str):
    """Strict parse of the model reply. Raises ValueError on anything unusable."""
    data = json.loads(_strip_fence(text))
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    if len(data) < RESULT_COUNT:
        raise ValueError(f"expected {RESULT_COUNT} results, got {len(data)}")
    out = []
    for i, item in enumerate(data[:RESULT_COUNT]):
        if not isinstance(item, dict):
            raise ValueError(f"result {i} is not an object")
        for k in ("name", "description", "estimatedPrice"):
            if clean_str(item.get(k)) == "":
                raise ValueError(f"result {i} has no {k}")
        res = dict(item)
        res["conditionRating"] = coerce_rating(item.get("conditionRating"))
        if clean_str(res.get("id")) == "":
            res["id"] = f"ai-{i + 1}"
        if clean_str(res.get("imageUrl")) == "":
            res["imageUrl"] = STOCK_IMAGES[i]
        out.append(res)
    return out


# ---------- Fallback ----------
def _year_span(year: str) -> str:
    y = leading_int(year)
    return f"{year}-{y + 5}" if y is not None else year


def fallback_results(s: dict):
    q, year, make, model = s["partSearch"], s["year"], s["make"], s["model"]
    return [
        {
            "id": "fallback-1",
            "name": f"Premium {q} for {year} {make} {model}",
            "description": (f"High-quality {q} specifically designed for your {year} {make} {model}. "
                            "Features enhanced durability and performance compared to standard options."),
            "conditionRating": 85,
            "estimatedPrice": "$79.99",
            "imageUrl": STOCK_IMAGES[0],
        },
        {
            "id": "fallback-2",
            "name": f"OEM Replacement {q}",
            "description": (f"Genuine OEM specification replacement {q} for {make} vehicles. "
                            f"Direct fit for your {year} {model} with factory-level quality."),
            "conditionRating": 92,
            "estimatedPrice": "$129.99",
            "imageUrl": STOCK_IMAGES[1],
        },
        {
            "id": "fallback-3",
            "name": f"Economy {q} Kit",
            "description": (f"Budget-friendly complete {q} kit compatible with {_year_span(year)} "
                            f"{make} {model} models. Includes all necessary components for installation."),
            "conditionRating": 78,
            "estimatedPrice": "$59.99",
            "imageUrl": STOCK_IMAGES[2],
        },
    ]


def recommend(search: dict, client=None):
    """Returns (results, source) where source is "ai" or "fallback"."""
    s = normalize(search)
    try:
        results = parse_results(call_completion(build_prompt(s), client=client))
    except (OpenAIError, RuntimeError, ValueError) as e:
        logger.warning("AI recommendations unavailable, using fallback: %s", e)
        return fallback_results(s), "fallback"
    logger.info("AI recommendations served for %s %s %s", s["year"], s["make"], s["model"])
    return results, "ai"
