import atexit
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import Settings, create_mongo_client, ensure_indexes, get_db
from keuangan.api import EXTENSION_KEY, Services, ai, reports, transactions
from keuangan.assistant import AssistantBridge, CompletionClient, GeminiClient
from keuangan.errors import KeuanganError
from keuangan.logging_setup import configure_logging, get_logger
from keuangan.repositories.transactions import TransactionRepository
from model import index_specs

logger = get_logger("keuangan.app")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(KeuanganError)
    def handle_keuangan_error(err: KeuanganError):
        if err.status_code >= 500:
            logger.error("request failed: %s", err.message)
        else:
            logger.warning("rejected request: %s", err.message)
        return jsonify({"error": err.message}), err.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        if isinstance(err, HTTPException):
            return err
        logger.exception("unhandled error")
        return jsonify({"error": str(err)}), 500


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[TransactionRepository] = None,
    completion: Optional[CompletionClient] = None,
) -> Flask:
    """Build the Flask app and its dependencies.

    ``store`` and ``completion`` replace the MongoDB repository and the Gemini
    client (tests pass in-memory doubles). Without them they are built from
    ``settings``; the MongoClient created here is closed by ``shutdown``.
    """
    settings = settings or Settings.from_env()
    app = Flask(__name__)

    mongo_client = None
    if store is None:
        mongo_client = create_mongo_client(settings)
        store = TransactionRepository(get_db(mongo_client, settings))
    if completion is None and settings.gemini_api_key:
        completion = GeminiClient(settings.gemini_api_key, settings.gemini_model)

    app.extensions[EXTENSION_KEY] = Services(
        transactions=store,
        assistant=AssistantBridge(store, completion, settings.assistant_language),
        mongo_client=mongo_client,
    )

    app.register_blueprint(transactions.bp, url_prefix="/api/transactions")
    app.register_blueprint(reports.bp, url_prefix="/api/reports")
    app.register_blueprint(ai.bp, url_prefix="/api/ai")
    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


def shutdown(app: Flask) -> None:
    """Release the MongoClient built by create_app (no-op for injected stores)."""
    services = app.extensions.get(EXTENSION_KEY)
    if services is not None and services.mongo_client is not None:
        services.mongo_client.close()
        services.mongo_client = None
        logger.info("mongo client closed")


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)
    atexit.register(shutdown, app)

    services = app.extensions[EXTENSION_KEY]
    try:
        ensure_indexes(services.transactions.collection.database, index_specs)
        logger.info("database indexes ensured")
    except Exception as e:  # noqa: BLE001
        logger.warning("could not create database indexes: %s", e)

    app.run(debug=False)


if __name__ == "__main__":
    main()
