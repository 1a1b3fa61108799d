import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.database import Database


# Database name and connection string (LOCAL ONLY defaults)
mainDB: str = "financialTracker"
mainDB_uri: str = "mongodb://127.0.0.1:27017"


@dataclass
class Settings:
    mongodb_uri: str = mainDB_uri
    db_name: str = mainDB
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    assistant_language: str = "Indonesian"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """Read settings from the environment, after loading a .env file if any.

        Env:
          - MONGODB_URI: e.g. mongodb://127.0.0.1:27017
          - DB_NAME
          - GOOGLE_GEMINI_API_KEY, GEMINI_MODEL
          - ASSISTANT_LANGUAGE: language the assistant answers in
          - KEUANGAN_LOG_LEVEL
        """
        load_dotenv(dotenv_path)
        return cls(
            mongodb_uri=os.getenv("MONGODB_URI", mainDB_uri),
            db_name=os.getenv("DB_NAME", mainDB),
            gemini_api_key=os.getenv("GOOGLE_GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
            assistant_language=os.getenv("ASSISTANT_LANGUAGE", "Indonesian"),
            log_level=os.getenv("KEUANGAN_LOG_LEVEL", "INFO"),
        )


def create_mongo_client(settings: Settings) -> MongoClient:
    """Build the process-wide MongoClient. The caller owns it and must close it."""
    return MongoClient(settings.mongodb_uri, appname="keuangan.dashboard", connect=False)


def get_db(client: MongoClient, settings: Settings) -> Database:
    return client[settings.db_name]


def ensure_indexes(db: Database, index_specs: Dict[str, List[Tuple]]):
    """Create indexes based on {collection: [(keys, options_dict), ...]} specs.

    Example:
        ensure_indexes(db, {
            "transactions": [
                (("date", 1), {"name": "idx_tx_date"}),
            ]
        })
    """
    for collection_name, index_list in index_specs.items():
        coll = db[collection_name]
        for keys, options in index_list:
            coll.create_index([keys] if isinstance(keys[0], str) else list(keys), **(options or {}))
