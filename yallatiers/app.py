import os
import logging

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from yallatiers.config import Config
from yallatiers.extensions import db
from yallatiers.routes import ALL_BLUEPRINTS
from yallatiers.utils.responses import err


def _register_error_handlers(app: Flask):
    @app.errorhandler(SQLAlchemyError)
    def db_error(e):
        db.session.rollback()
        app.logger.exception("database error: %s", e)
        return err("Internal server error", 500)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return err(e.description or e.name, e.code)


def create_app(config_object=Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = False

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not app.config.get("OPENROUTER_API_KEY"):
        app.logger.warning("OPENROUTER_API_KEY not set; product search will serve fallback results")

    db.init_app(app)
    with app.app_context():
        db.create_all()

    for bp in ALL_BLUEPRINTS:
        app.register_blueprint(bp)
    _register_error_handlers(app)

    @app.get("/")
    def index():
        return {"service": "yallatiers", "status": "ok", "prefix": "/api"}

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=False)
