"""Simple Flask web interface for the pallet optimizer."""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, render_template, request

from .optimizer import inches_to_cm, load_request, optimize_request

logger = logging.getLogger(__name__)

app = Flask(__name__)

_UNIT_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("cm", "Centimetres (cm)"),
    ("in", "Inches (in)"),
)

_DEFAULT_FORM = {
    "length": "",
    "width": "",
    "height": "",
    "quantity": "",
    "unit": "cm",
}


def _calculate(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Run one calculation and return the JSON envelope."""

    try:
        calc_request = load_request(raw)
    except ValueError as exc:
        logger.info("Rejected pallet request: %s", exc)
        return {"success": False, "message": str(exc)}
    outcome = optimize_request(calc_request)
    if not outcome.success:
        logger.info("Pallet optimisation failed: %s", outcome.message)
    return outcome.to_dict()


@app.route("/", methods=["GET", "POST"])
def index():
    form_values = dict(_DEFAULT_FORM)
    error: str | None = None
    result: Dict[str, Any] | None = None

    if request.method == "POST":
        form_values.update(request.form.to_dict())
        envelope = _calculate(form_values)
        if envelope["success"]:
            result = envelope["data"]
            result["actual_height_cm"] = inches_to_cm(
                result["optimization"]["actual_height"]
            )
        else:
            error = envelope["message"]

    return render_template(
        "index.html",
        form=form_values,
        unit_options=_UNIT_OPTIONS,
        result=result,
        error=error,
    )


@app.route("/calculate", methods=["POST"])
def calculate():
    raw = request.get_json(silent=True)
    if not isinstance(raw, dict):
        raw = request.form.to_dict()
    envelope = _calculate(raw)
    return jsonify(envelope), 200 if envelope["success"] else 400


if __name__ == "__main__":
    app.run(debug=True)
