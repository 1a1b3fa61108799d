import datetime as dt
from typing import Any, Dict

from flask import Blueprint, jsonify, request

from keuangan.api import services

bp = Blueprint("transactions", __name__)


def _serialize(doc: Dict[str, Any]) -> Dict[str, Any]:
    # BSON datetime -> plain calendar date
    if isinstance(doc.get("date"), dt.datetime):
        doc["date"] = doc["date"].date().isoformat()
    return doc


@bp.get("/")
def list_transactions():
    data = [_serialize(doc) for doc in services().transactions.list()]
    return jsonify(data)


@bp.post("/")
def create_transaction():
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        return jsonify({"error": "JSON object body is required"}), 400
    _id = services().transactions.create(body)
    return jsonify({"_id": _id}), 201


@bp.get("/<transaction_id>")
def get_transaction(transaction_id):
    transaction = services().transactions.get(transaction_id)
    if not transaction:
        return jsonify({"error": "Transaction not found"}), 404
    return jsonify(_serialize(transaction))


@bp.delete("/<transaction_id>")
def delete_transaction(transaction_id):
    ok = services().transactions.delete(transaction_id)
    return ("", 204) if ok else (jsonify({"error": "Transaction not found"}), 404)
