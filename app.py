import importlib
import logging
import os
import pkgutil

from dotenv import load_dotenv
from flask import Blueprint, Flask


def _configure_logging() -> None:
    from config.settings import LOG_LEVEL

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> Flask:
    """Flask application factory."""
    load_dotenv()
    _configure_logging()

    app = Flask(__name__)
    app.secret_key = os.getenv("SECRET_KEY", "dev")
    app.json.sort_keys = False

    """Registration of error handlers."""
    from middleware.handlers import register_error_handlers
    register_error_handlers(app)

    # Auto-register all blueprints defined in routes/*.py
    from routes import __path__ as routes_path

    for _, module_name, _ in pkgutil.iter_modules(routes_path):
        module = importlib.import_module(f"routes.{module_name}")
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, Blueprint) and obj.name not in app.blueprints:
                app.register_blueprint(obj)

    from config.database import bootstrap_indexes
    bootstrap_indexes()

    logging.getLogger(__name__).info(
        "Blog API created with blueprints: %s", ", ".join(sorted(app.blueprints))
    )
    return app


if __name__ == "__main__":
    from os import getenv

    app = create_app()
    app.run(
        host="0.0.0.0",
        port=int(getenv("PORT", 8000)),
        debug=getenv("FLASK_DEBUG", "0") == "1",
        use_reloader=False,
    )
