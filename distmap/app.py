# app.py: slim Flask API that marshals JSON tile tables into the distance map core
# deps: pip install flask numpy structlog

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
import time
import structlog
from flask import Flask, request, jsonify

from distmap.config import (
    API_HOST,
    API_PORT,
    DEFAULT_COST_FIELD,
    DEFAULT_MISSING_COST,
    FLEE_COEFFICIENT,
    LOG_LEVEL,
)
from distmap.binding import dijkstra_map, flee_map, multi_dijkstra_map
from distmap.errors import DistanceMapError
from distmap.logging_setup import configure_logging

logger = structlog.get_logger()

app = Flask(__name__)

# ======= CORS =======
@app.after_request
def _cors(resp):
    resp.headers["Access-Control-Allow-Origin"]  = "*"
    resp.headers["Access-Control-Allow-Headers"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    return resp

@app.errorhandler(DistanceMapError)
def _distance_map_error(e: DistanceMapError):
    logger.warning("distance map request rejected", error=str(e), kind=type(e).__name__)
    return jsonify({"error": str(e), "kind": type(e).__name__}), 400

# ======= request helpers =======
class RequestError(ValueError):
    pass

@app.errorhandler(RequestError)
def _bad_request(e: RequestError):
    return jsonify({"error": str(e)}), 400

def _body() -> Dict[str, Any]:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise RequestError("JSON object body required")
    if "tiles" not in data:
        raise RequestError("tiles required")
    return data

def _num(data: Dict[str, Any], key: str, default: Optional[Any] = None) -> float:
    v = data.get(key, default)
    if v is None:
        raise RequestError(f"{key} required")
    try:
        return float(v)
    except (TypeError, ValueError):
        raise RequestError(f"{key} must be a number")

def _coord(data: Dict[str, Any], key: str) -> int:
    v = data.get(key)
    if v is None:
        raise RequestError(f"{key} required")
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    if not isinstance(v, int) or isinstance(v, bool):
        raise RequestError(f"{key} must be an integer, got {v!r}")
    return v

def _table_args(data: Dict[str, Any]) -> Tuple[Any, Optional[str], float]:
    field = data.get("field", DEFAULT_COST_FIELD)
    if field is not None and not isinstance(field, str):
        raise RequestError("field must be a string or null")
    default = _num(data, "default", default=DEFAULT_MISSING_COST)
    return data["tiles"], field, default

def _respond(distances, t0: float):
    return jsonify({
        "distances": distances,
        "width": len(distances),
        "height": len(distances[0]) if distances else 0,
        "elapsed_s": time.perf_counter() - t0,
    })

# ======= endpoints =======
@app.route("/", methods=["GET"])
def root():
    return {
        "ok": True,
        "single": "/distance_map/single (POST JSON)",
        "multi": "/distance_map/multi (POST JSON)",
        "flee": "/distance_map/flee (POST JSON)",
    }

@app.route("/distance_map/single", methods=["POST"])
def distance_map_single():
    """
    JSON body:
    {
      "tiles": [[{"solid": false}, ...], ...],   // tiles[x-1][y-1]
      "x": 3, "y": 3,                            // 1-indexed source
      "maxcost": 100,
      "field": "solid",                          // null: tiles are raw costs
      "default": 0
    }
    """
    t0 = time.perf_counter()
    data = _body()
    tiles, field, default = _table_args(data)
    x, y = _coord(data, "x"), _coord(data, "y")
    maxcost = _num(data, "maxcost")
    return _respond(dijkstra_map(tiles, x, y, maxcost, field=field, default=default), t0)

@app.route("/distance_map/multi", methods=["POST"])
def distance_map_multi():
    """
    JSON body: tiles/maxcost/field/default as above plus
      "goals": [{"x": 1, "y": 1, "value": 0}, ...]
    """
    t0 = time.perf_counter()
    data = _body()
    tiles, field, default = _table_args(data)
    maxcost = _num(data, "maxcost")
    raw_goals = data.get("goals") or []
    if not isinstance(raw_goals, list) or not raw_goals:
        raise RequestError("goals must be a non-empty list")
    goals = []
    for g in raw_goals:
        if not isinstance(g, dict):
            raise RequestError("each goal must be an object with x, y")
        goals.append((_coord(g, "x"), _coord(g, "y"), _num(g, "value", default=0.0)))
    return _respond(multi_dijkstra_map(tiles, goals, maxcost, field=field, default=default), t0)

@app.route("/distance_map/flee", methods=["POST"])
def distance_map_flee():
    """Same body as /distance_map/single plus optional "coefficient" (negative)."""
    t0 = time.perf_counter()
    data = _body()
    tiles, field, default = _table_args(data)
    x, y = _coord(data, "x"), _coord(data, "y")
    maxcost = _num(data, "maxcost")
    coefficient = _num(data, "coefficient", default=FLEE_COEFFICIENT)
    return _respond(
        flee_map(tiles, x, y, maxcost, coefficient=coefficient, field=field, default=default), t0
    )


if __name__ == "__main__":
    configure_logging(LOG_LEVEL)
    app.run(host=API_HOST, port=API_PORT, threaded=True)
