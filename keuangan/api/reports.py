from flask import Blueprint, jsonify, request

from keuangan import analytics as an
from keuangan.api import services


bp = Blueprint("reports", __name__)


def _chronological() -> bool:
    return request.args.get("order", "first_seen") == "chronological"


@bp.get("/summary")
def summary():
    txns = services().transactions.list_transactions()
    return jsonify(an.compute_summary(txns).to_dict())


@bp.get("/categories")
def breakdown_by_category():
    txns = services().transactions.list_transactions()
    return jsonify([c.to_dict() for c in an.compute_category_totals(txns)])


@bp.get("/monthly")
def monthly_trend():
    txns = services().transactions.list_transactions()
    rows = an.compute_monthly_trend(txns, chronological=_chronological())
    return jsonify([m.to_dict() for m in rows])


@bp.get("/dashboard")
def dashboard():
    """Summary, kategori dan tren bulanan dalam satu response"""
    txns = services().transactions.list_transactions()
    return jsonify(an.build_dashboard(txns, chronological=_chronological()))
