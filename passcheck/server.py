import asyncio
import logging

from flask import Flask, jsonify, request

from .evaluator import InvalidPasswordError, evaluate, suggest
from .generator import PasswordGenerator

logger = logging.getLogger(__name__)

app = Flask(__name__)


@app.route("/evaluate", methods=["POST"])
def evaluate_password():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    password = data.get("password")
    options = data.get("options") or {}

    if not isinstance(options, dict):
        return jsonify({"error": "options must be an object"}), 400

    try:
        report = asyncio.run(evaluate(password, options))
    except InvalidPasswordError as e:
        logger.info("Rejected evaluation request: %s", e)
        return jsonify({"error": str(e)}), 400

    return jsonify(report.to_dict())


@app.route("/suggest", methods=["POST"])
def suggest_password():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400

    try:
        password = suggest(data)
    except (ValueError, TypeError) as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"password": password})


@app.route("/suggest/modes", methods=["GET"])
def suggestion_modes():
    return jsonify({"modes": list(PasswordGenerator.MODE_CONFIG)})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run("127.0.0.1", 5000, debug=False)
