"""Application factory and app-wide configuration."""

from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS
from loguru import logger

from backend.app.api.routes import api_bp
from backend.app.config import load_settings
from backend.app.log import configure_logging
from backend.domain.store import DEMO_CONTRIBUTIONS, ContributionStore


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    settings = load_settings(config)
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    store = ContributionStore(settings.database_path)
    store.init_schema()
    if settings.seed_demo_data and not store.list_contributions():
        store.seed_contributions(DEMO_CONTRIBUTIONS)
    app.extensions["contribution_store"] = store

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(
        f"App ready (db={settings.database_path}, return rate={settings.annual_return_rate:.2%})"
    )
    return app
