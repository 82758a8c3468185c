import logging

import click
from flask import Flask
from flask_cors import CORS
from pymongo.errors import PyMongoError

from config import Config
from utils.db import init_db_connection, ensure_indexes
from utils.errors import register_error_handlers
from utils.serializers import MongoJSONProvider

# Import controllers
from controllers.users_controller import users_bp
from controllers.attendance_controller import attendance_bp
from controllers.dashboard_controller import dashboard_bp
from controllers.face_controller import face_bp
from controllers.app_controller import app_bp

logger = logging.getLogger(__name__)


def create_app(config_object=Config):
    app = Flask(__name__)               # Initialize Flask app
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    init_db_connection(app)             # Initialize MongoDB connection
    # after init_app: Flask-PyMongo 3 installs its own BSON provider
    app.json = MongoJSONProvider(app)   # ObjectId / datetime aware JSON

    CORS(app)                           # browser kiosks on other origins
    register_error_handlers(app)
    _register_index_setup(app)

    # Register Blueprint
    app.register_blueprint(users_bp)
    app.register_blueprint(attendance_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(face_bp)
    app.register_blueprint(app_bp)      # catch-all shell, keep last

    return app


def _register_index_setup(app):
    state = {"ready": not app.config.get("MONGO_ENSURE_INDEXES")}

    # Indexes are created on the first request, so building the app needs no server
    @app.before_request
    def create_indexes_once():
        if state["ready"]:
            return None
        try:
            ensure_indexes()
            state["ready"] = True
        except PyMongoError as e:
            # keep serving; retried on the next request
            logger.error("MongoDB connection error: %s", e)
        return None

    @app.cli.command("init-db")
    def init_db_command():
        """Create the MongoDB indexes."""
        ensure_indexes()
        click.echo("Indexes created.")


app = create_app()


# Run the app
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=True)
