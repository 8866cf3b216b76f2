"""
main.py — Sorting Visualizer Flask App
=======================================
JSON API in front of the step-synchronized sorting engine.  The page
that draws the bars polls /api/state after every user action (and on a
timer while a sort runs) and paints `elements` with TAG_COLORS.

Routes:
  GET  /api/algorithms          – registry + tag palette + presets
  GET  /api/state               – latest Step snapshot (for polling)
  POST /api/array/generate      – new random / preset array (size, value_range, preset)
  POST /api/array/custom        – load "5, 3, 9, 1, 2"
  POST /api/sort/start          – start the selected algorithm
  POST /api/sort/pause          – pause
  POST /api/sort/resume         – resume
  POST /api/sort/toggle         – pause ⇄ resume (single button)
  POST /api/sort/stop           – stop, keep partial order
  POST /api/sort/reset          – stop + regenerate at current size
  POST /api/config/speed        – speed 1..100
  POST /api/compare             – headless run of two algorithms on the current values

State management:
  One EngineHost per process owns the event loop and the RunController.
  Every route marshals its call onto that loop, so two requests can
  never touch the engine at the same time.
"""

import logging
import os
import sys

from flask import Flask, jsonify, request

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from algorithms import list_algorithms
from config import EngineConfig
from engine import EngineHost, compare, measure
from errors import InvalidOperationError, SortVisualizerError
from logging_config import get_logger, setup_logging
from sequence import PRESETS, TAG_COLORS

logger = get_logger(__name__)

app = Flask(__name__)
host = EngineHost(EngineConfig.from_env())


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
@app.errorhandler(SortVisualizerError)
def handle_engine_error(e: SortVisualizerError):
    status = 409 if isinstance(e, InvalidOperationError) else 400
    return jsonify({"error": str(e)}), status


def _state_of(c) -> dict:
    """Snapshot and status read together on the loop thread."""
    return {"state": c.snapshot().to_dict(), "status": c.status.value}


def _state_payload(**extra):
    payload = host.call(_state_of)
    payload.update(extra)
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Read-only
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({
        "algorithms": [a.to_dict() for a in list_algorithms()],
        "tag_colors": TAG_COLORS,
        "presets":    list(PRESETS),
    })


@app.route("/api/state")
def api_state():
    def read(c):
        payload = _state_of(c)
        payload["metrics"] = c.last_metrics.to_dict() if c.last_metrics is not None else None
        return payload

    return jsonify(host.call(read))


# ---------------------------------------------------------------------------
# API: Array
# ---------------------------------------------------------------------------
@app.route("/api/array/generate", methods=["POST"])
def api_array_generate():
    data = request.get_json(silent=True) or {}
    size        = data.get("size")
    value_range = data.get("value_range")
    preset      = data.get("preset")
    seed        = data.get("seed")
    host.call(lambda c: c.generate(size=size, value_range=value_range, preset=preset, seed=seed))
    return _state_payload()


@app.route("/api/array/custom", methods=["POST"])
def api_array_custom():
    data = request.get_json(silent=True) or {}
    values = data.get("values", data.get("text", ""))
    host.call(lambda c: c.set_custom_sequence(values))
    return _state_payload()


# ---------------------------------------------------------------------------
# API: Run lifecycle
# ---------------------------------------------------------------------------
@app.route("/api/sort/start", methods=["POST"])
def api_sort_start():
    data = request.get_json(silent=True) or {}
    algo_key = data.get("algorithm", "bubble")
    host.call(lambda c: c.start(algo_key))
    return _state_payload()


@app.route("/api/sort/pause", methods=["POST"])
def api_sort_pause():
    changed = host.call(lambda c: c.pause())
    return _state_payload(changed=changed)


@app.route("/api/sort/resume", methods=["POST"])
def api_sort_resume():
    changed = host.call(lambda c: c.resume())
    return _state_payload(changed=changed)


@app.route("/api/sort/toggle", methods=["POST"])
def api_sort_toggle():
    paused = host.call(lambda c: c.toggle_pause())
    return _state_payload(paused=paused)


@app.route("/api/sort/stop", methods=["POST"])
def api_sort_stop():
    changed = host.call(lambda c: c.stop())
    return _state_payload(changed=changed)


@app.route("/api/sort/reset", methods=["POST"])
def api_sort_reset():
    host.call(lambda c: c.reset())
    return _state_payload()


# ---------------------------------------------------------------------------
# API: Config
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = request.get_json(silent=True) or {}
    try:
        speed = int(data.get("speed", 50))
    except (TypeError, ValueError):
        return jsonify({"error": "speed must be an integer 1..100"}), 400
    speed = host.call(lambda c: c.set_speed(speed))
    return jsonify({"speed": speed})


# ---------------------------------------------------------------------------
# API: Comparison mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = request.get_json(silent=True) or {}
    left_key  = data.get("left", "merge")
    right_key = data.get("right", "quick")
    values = host.call(lambda c: c.sequence.values())

    async def _both():
        left  = await measure(left_key, values)
        right = await measure(right_key, values)
        return compare(left, right)

    result = host.submit(_both())
    return jsonify(result.to_dict())


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    setup_logging(logging.DEBUG if os.environ.get("SORTVIZ_DEBUG") else logging.INFO)
    print("=" * 60)
    print("  Sorting Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=False, threaded=True)
