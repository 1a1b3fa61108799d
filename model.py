from __future__ import annotations

from typing import Dict, List


# MongoDB collection "transactions", one flat document per transaction:
#   type      income | expense
#   amount    whole currency units (IDR), never negative
#   category  free text, empty => Uncategorized in reports
#   date      BSON datetime, day precision
#   note      free text
# Aggregates are never stored.


# Suggested indexes (to be applied via config.ensure_indexes)
index_specs: Dict[str, List] = {
    "transactions": [
        (("date", 1), {"name": "idx_tx_date"}),
        (("type", 1), {"name": "idx_tx_type"}),
        (("category", 1), {"name": "idx_tx_category"}),
    ],
}
