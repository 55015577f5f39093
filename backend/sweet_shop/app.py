import logging

from .main import create_app

logger = logging.getLogger(__name__)

# Create Flask app
app = create_app()

if __name__ == "__main__":
    settings = app.extensions["sweet_shop"].settings
    logger.info(
        "Starting development server",
        extra={"context": {"port": settings.port}},
    )
    app.run(host="0.0.0.0", port=settings.port, debug=not settings.is_production)
