# debatehub/api/routes.py
from flask import Blueprint, current_app, jsonify, request, send_from_directory
import os

from debatehub.services.fact_check import FactCheckError
from debatehub.topics import TOPIC_CATALOG, find_topic

api_bp = Blueprint("api_bp", __name__)
main_bp = Blueprint("main_bp", __name__)


@main_bp.route("/")
def index():
    static_dir = current_app.static_folder or ""
    if os.path.isfile(os.path.join(static_dir, "index.html")):
        return send_from_directory(static_dir, "index.html")
    return jsonify({"app": current_app.config.get("APP_NAME", "DebateHub")})


@main_bp.route("/healthz")
def healthz():
    coordinator = current_app.extensions["debate"]
    return jsonify(
        {
            "status": "ok",
            "rooms": len(coordinator.state.rooms),
            "polls": len(coordinator.state.polls),
        }
    )


@api_bp.route("/topics", methods=["GET"])
def list_topics():
    return jsonify(TOPIC_CATALOG), 200


@api_bp.route("/topics/<topic_id>", methods=["GET"])
def get_topic(topic_id):
    topic = find_topic(topic_id)
    if topic is None:
        return jsonify({"error": f"Unknown topic '{topic_id}'"}), 404
    return jsonify(topic), 200


@api_bp.route("/fact-check", methods=["POST"])
def fact_check():
    data = request.get_json(silent=True) or {}
    statement = data.get("statement")
    if not isinstance(statement, str) or not statement.strip():
        return jsonify({"error": "statement is required"}), 400
    topic = data.get("topic") if isinstance(data.get("topic"), str) else None

    checker = current_app.extensions["debate"].fact_checker
    if checker is None:
        return jsonify({"error": "Fact checking is not configured"}), 503
    try:
        verdict = checker.verify(statement.strip(), topic)
    except FactCheckError as e:
        current_app.logger.error(f"Fact-check endpoint failed: {e}")
        return jsonify({"error": "Failed to fact-check statement"}), 502
    return jsonify(verdict), 200
