from flask import Blueprint, jsonify, request

from keuangan.api import services


bp = Blueprint("ai", __name__)


@bp.post("/")
def ask():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        data = {}
    message = str(data.get("message") or "").strip()
    if not message:
        return jsonify({"error": "message is required"}), 400

    text = services().assistant.answer(message)
    return jsonify({"response": text})


@bp.get("/test")
def test_gemini():
    text = services().assistant.ping()
    return jsonify({
        "message": "Gemini API successful!",
        "response": text,
    })
