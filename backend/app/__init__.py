"""Application factory and app-wide configuration."""

from typing import Callable, Optional

import click
from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.config import Settings
from backend.core.logging import get_logger, setup_logging
from backend.db.database import Database
from backend.services.investments import InvestmentService
from backend.utils.time import utc_now

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    clock: Callable = utc_now,
) -> Flask:
    """Build the Flask app instance and wire its collaborators once."""
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.CORS_ORIGINS}},
        supports_credentials=True,
    )

    database = database or Database(settings.DATABASE_URL)
    if settings.AUTO_CREATE_TABLES:
        database.create_all()

    app.extensions["database"] = database
    app.extensions["investment_service"] = InvestmentService(
        database,
        profit_signal_window=settings.PROFIT_SIGNAL_WINDOW_DAYS,
    )
    app.extensions["clock"] = clock

    app.register_blueprint(api_bp, url_prefix="/api")
    _register_commands(app)

    logger.info("Application created (database=%s)", database.engine.url.render_as_string(hide_password=True))
    return app


def _register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db_command() -> None:
        """Create the database tables."""
        app.extensions["database"].create_all()
        click.echo("Database initialized.")

    @app.cli.command("seed-packages")
    def seed_packages_command() -> None:
        """Insert the default investment packages."""
        app.extensions["database"].create_all()
        added = app.extensions["investment_service"].seed_packages()
        click.echo(f"Seeded {added} investment package(s).")
