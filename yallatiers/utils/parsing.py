import re

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(v, default=None, minv=None, maxv=None):
    if v is None or v == "" or isinstance(v, bool): return default
    if isinstance(v, float) and not v.is_integer(): return default
    try:
        n = int(v)
        if minv is not None and n < minv: return default
        if maxv is not None and n > maxv: return default
        return n
    except (TypeError, ValueError):
        return default


def leading_int(v, default=None):
    """parseInt-style read: optional whitespace and sign, then digits; anything after is ignored."""
    m = _LEADING_INT.match(str(v)) if v is not None else None
    return int(m.group(1)) if m else default


def clean_str(v):
    if v is None: return ""
    return str(v).strip()


def missing_fields(data, required):
    return [k for k in required if clean_str(data.get(k)) == ""]


def normalize_email(s):
    if not s:
        return None
    return str(s).strip().lower()
