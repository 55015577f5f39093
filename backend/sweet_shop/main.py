import logging
import os
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask, request
from werkzeug.exceptions import HTTPException

from sweet_shop.controllers.auth_controller import auth_bp
from sweet_shop.controllers.health_controller import health_bp
from sweet_shop.controllers.sweet_controller import sweets_bp
from sweet_shop.core.api_utils import error_response
from sweet_shop.core.config import Settings, mask_url_password
from sweet_shop.core.container import (
    EXTENSION_KEY,
    AppContainer,
    close_db_session,
    get_container,
)
from sweet_shop.core.db import register_query_timing
from sweet_shop.core.logging_config import setup_logging
from sweet_shop.core.security import BcryptPasswordHasher, JWTTokenSigner
from sweet_shop.db.seed import seed_sample_sweets
from sweet_shop.db.session import build_engine, build_session_factory, create_tables

logger = logging.getLogger(__name__)


def _init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        logger.info(
            "Sentry not initialized (SENTRY_DSN not set)",
            extra={"context": {"environment": settings.environment}},
        )
        return

    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=os.getenv("GIT_SHA", "unknown"),
        integrations=[FlaskIntegration(), SqlalchemyIntegration()],
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
    logger.info(
        "Sentry initialized",
        extra={"context": {"environment": settings.environment}},
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error):
        return error_response("Endpoint not found", 404)

    @app.errorhandler(Exception)
    def unhandled_exception(error):
        if isinstance(error, HTTPException):
            return error
        logger.error(
            "Unhandled exception",
            extra={"context": {"method": request.method, "path": request.path}},
            exc_info=True,
        )
        return error_response("Internal server error", 500)


def _register_cli(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db_command():
        """Create all database tables."""
        create_tables(get_container(app).engine)
        click.echo("Database tables created")

    @app.cli.command("seed-sweets")
    def seed_sweets_command():
        """Insert the sample sweets when the inventory is empty."""
        container = get_container(app)
        create_tables(container.engine)
        with container.session_factory() as db:
            inserted = seed_sample_sweets(db)
        click.echo(f"Inserted {inserted} sample sweets")


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build a Flask application wired to its own engine and collaborators.

    Args:
        settings: Explicit settings; read from the environment when omitted
    """
    if settings is None:
        # Only load from .env when DATABASE_URL is not already defined
        if not os.getenv("DATABASE_URL"):
            load_dotenv()
        settings = Settings.from_env()
    else:
        settings.validate()

    app = Flask(__name__)
    app.config["TESTING"] = settings.is_testing
    app.json.sort_keys = False

    setup_logging(
        app,
        log_level=settings.log_level,
        enable_sql_echo=settings.sql_echo,
        log_to_file=settings.log_to_file,
        use_json_format=settings.log_json,
    )
    _init_sentry(settings)

    engine = build_engine(settings.database_url, echo=False)
    register_query_timing(engine, threshold_ms=settings.slow_query_ms)
    create_tables(engine)

    app.extensions[EXTENSION_KEY] = AppContainer(
        settings=settings,
        engine=engine,
        session_factory=build_session_factory(engine),
        hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
        signer=JWTTokenSigner(settings.jwt_secret_key),
    )
    app.teardown_appcontext(close_db_session)

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(sweets_bp)

    _register_error_handlers(app)
    _register_cli(app)

    logger.info(
        "Application created",
        extra={
            "context": {
                "environment": settings.environment,
                "database_url": mask_url_password(settings.database_url),
            }
        },
    )
    return app
