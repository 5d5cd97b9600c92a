import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from flask import Flask, jsonify
from flask_cors import CORS
from src.config import Config
from src.extensions import db, migrate
from common.exceptions import NotFoundError, PartialWriteError, ValidationError
import models  # noqa: F401  model registration for migrations
from storage import build_store

from routes import register_routes

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({"error": str(e), "fields": e.errors}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(PartialWriteError)
    def handle_partial_write(e):
        logger.error("Unhandled partial write: %s", e)
        return jsonify({"error": str(e), "transaction_id": e.transaction_id}), 400


def create_app(config_object=Config, store=None):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    CORS(app, origins=app.config["CORS_ORIGINS"], methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "X-User-Id"])

    # initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    app.extensions["record_store"] = store if store is not None else build_store(app.config)
    logger.info("Record store: %s", type(app.extensions["record_store"]).__name__)

    register_routes(app)
    register_error_handlers(app)

    @app.get("/")
    def index():
        return jsonify({"message": "Ledgerly API"}), 200

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(host="0.0.0.0", port=5000, debug=app.config["DEBUG"])
