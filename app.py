import logging

from flask import Flask

from config import Config
from extensions import db
from dailyquiz.errors import register_error_handlers
from dailyquiz.routes import register_routes

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, X-Admin-Key",
}


def configure_logging(app):
    logger = logging.getLogger("dailyquiz")
    logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        logger.addHandler(handler)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)
    db.init_app(app)

    register_routes(app)
    register_error_handlers(app)

    @app.after_request
    def add_cors_headers(response):
        response.headers.update(CORS_HEADERS)
        return response

    with app.app_context():
        from dailyquiz import models  # noqa: F401  (register tables)
        db.create_all()

    return app


if __name__ == "__main__":
    app = create_app()
    app.logger.info("DAILY QUIZ READY ON 0.0.0.0:5000")
    app.run(host="0.0.0.0", port=5000, debug=True)
