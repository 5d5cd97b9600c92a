from functools import wraps
from flask import request, jsonify, g, current_app

OWNER_HEADER = "X-User-Id"


def owner_required(f):
    """Resolve the owning user for the request from the X-User-Id header."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        raw = request.headers.get(OWNER_HEADER)
        if raw is None or not raw.strip():
            g.current_user_id = current_app.config["DEFAULT_USER_ID"]
        else:
            try:
                g.current_user_id = int(raw)
            except ValueError:
                return jsonify({
                    'error': f'{OWNER_HEADER} must be an integer',
                    'error_code': 'OWNER_INVALID'
                }), 400
        return f(*args, **kwargs)
    return decorated_function


def get_current_user_id():
    return getattr(g, 'current_user_id', None)
