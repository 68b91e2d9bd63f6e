import json
import re

from flask import Blueprint, current_app, jsonify, request

from ..extensions import store
from ..storage.json_store import NotFound

bp = Blueprint("api", __name__)

ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ENDPOINTS = {
    "GET /collection": "Get all items",
    "GET /collection/:id": "Get single item",
    "POST /collection": "Create item",
    "PUT /collection/:id": "Update item",
    "DELETE /collection/:id": "Delete item",
}

NOT_A_NUMBER = float("nan")

# Optional sign, then a 0x hex literal or decimal digits; "0x" without hex digits is NaN
_LEADING_INT = re.compile(r"^\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(?!0[xX])(\d+))")


class InvalidBody(ValueError):
    pass


# -----------------------------
# Request parsing
# -----------------------------
def parse_item_id(segment):
    """Leading integer of a path segment, or NaN (which equals nothing)."""
    if segment is None:
        return NOT_A_NUMBER
    m = _LEADING_INT.match(segment)
    if not m:
        return NOT_A_NUMBER
    sign, hex_digits, digits = m.groups()
    value = int(hex_digits, 16) if hex_digits else int(digits)
    return -value if sign == "-" else value


def request_path() -> str:
    """request.path with the leading slashes Werkzeug strips put back."""
    raw = request.environ.get("PATH_INFO", "")
    leading = len(raw) - len(raw.lstrip("/"))
    return "/" * max(leading, 1) + request.path.lstrip("/")


def parse_path(path: str):
    """'/users/3' -> ('users', 3). Segments past the id are ignored."""
    parts = path.split("/")
    collection = parts[1] if len(parts) > 1 else ""
    item_id = parse_item_id(parts[2] if len(parts) > 2 else None)
    return collection, item_id


def _reject_constant(name):
    raise ValueError(f"{name} is not valid JSON")


def read_body():
    """Buffer and parse the request body. Empty -> {}."""
    raw = request.get_data(as_text=True)
    if not raw:
        return {}
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidBody(str(e)) from e


def _fields(body):
    """Fields a body spreads into a record: objects as-is, arrays and strings by index."""
    if isinstance(body, dict):
        return body
    if isinstance(body, (list, str)):
        return {str(i): v for i, v in enumerate(body)}
    return {}


# -----------------------------
# Responses
# -----------------------------
def send_json(status: int, data):
    if data is None:
        resp = current_app.response_class(b"", status=status, mimetype="application/json")
    else:
        resp = jsonify(data)
        resp.status_code = status
    resp.headers["Access-Control-Allow-Origin"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = ", ".join(current_app.config["CORS_METHODS"])
    resp.headers["Access-Control-Allow-Headers"] = ", ".join(current_app.config["CORS_ALLOW_HEADERS"])
    return resp


# -----------------------------
# Verb handlers
# -----------------------------
def handle_list(collection, item_id, body):
    return send_json(200, store.list(collection))


def handle_create(collection, item_id, body):
    return send_json(201, store.create(collection, _fields(body)))


def handle_update(collection, item_id, body):
    return send_json(200, store.update(collection, item_id, _fields(body)))


def handle_delete(collection, item_id, body):
    store.delete(collection, item_id)
    return send_json(204, None)


HANDLERS = {
    "GET": handle_list,
    "POST": handle_create,
    "PUT": handle_update,
    "DELETE": handle_delete,
}


def dispatch():
    if request.method == "OPTIONS":
        return send_json(200, None)

    path = request_path()
    if path == "/":
        return send_json(200, {
            "message": "JSON API Mock Server",
            "available_collections": store.collections(),
            "endpoints": ENDPOINTS,
        })

    try:
        body = read_body()
    except InvalidBody:
        return send_json(400, {"error": "Invalid JSON"})

    collection, item_id = parse_path(path)
    # PATCH, HEAD and unknown verbs are served as reads
    handler = HANDLERS.get(request.method, handle_list)
    try:
        return handler(collection, item_id, body)
    except NotFound as e:
        return send_json(404, {"error": str(e)})


@bp.before_app_request
def log_request():
    current_app.logger.info("%s %s", request.method, request.full_path.rstrip("?"))


@bp.route("/", methods=ROUTE_METHODS)
def index():
    return dispatch()


@bp.route("/<path:path>", methods=ROUTE_METHODS)
def collection_item(path):
    return dispatch()


@bp.app_errorhandler(405)
def unregistered_method(e):
    return dispatch()


@bp.app_errorhandler(404)
def unrouted_path(e):
    # Paths the URL map cannot express, e.g. a leading "//"
    return dispatch()
