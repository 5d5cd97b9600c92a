from datetime import datetime, date, timezone

from common.exceptions import ValidationError


def parse_int(value, field, errors):
    if isinstance(value, bool):
        errors[field] = "must be an integer"
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        errors[field] = "must be an integer"
        return None


def parse_datetime(value, field, errors):
    """Accept datetime/date objects or ISO-8601 strings (YYYY-MM-DD[THH:MM:SS])."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            errors[field] = "Invalid date format, use YYYY-MM-DD"
            return None
        # Stored datetimes are naive UTC
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
    errors[field] = "Invalid date format, use YYYY-MM-DD"
    return None


def parse_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def check_choice(value, field, choices, errors):
    if value not in choices:
        errors[field] = f"must be one of: {', '.join(choices)}"
        return None
    return value


def require(data, fields, errors):
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors[field] = f"{field} is required"


def raise_if_errors(errors, what):
    if errors:
        details = "; ".join(f"{k}: {v}" for k, v in errors.items())
        raise ValidationError(f"Invalid {what}: {details}", errors=errors)


def json_object(payload, what="request body"):
    """A decoded JSON body as a dict. Missing bodies are empty; arrays and scalars are rejected."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise_if_errors({"body": "must be a JSON object"}, what)
    return payload
