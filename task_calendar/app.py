from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from task_calendar.errors import RouteNotFound, TaskCalendarError
from task_calendar.logging_setup import configure_logging


def create_app(config_object="task_calendar.config.Config", store=None):
    """Build the Flask app.

    `store` replaces the configured TaskStore, which is how tests run the
    whole HTTP surface against an in-memory or failing store.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = False

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    CORS(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    from task_calendar.utils.db import get_service, init_app as init_db

    init_db(app, store=store)

    from task_calendar.routes.task_routes import tasks_bp

    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    @app.get("/api/health")
    def health():
        return jsonify(get_service().health()), 200

    # Unknown paths and unsupported methods both count as an unmatched route.
    @app.errorhandler(404)
    @app.errorhandler(405)
    def route_not_found(_):
        return jsonify(RouteNotFound().to_dict()), 404

    @app.errorhandler(500)
    def server_error(_):
        return jsonify(TaskCalendarError().to_dict()), 500

    @app.errorhandler(Exception)
    def unhandled_error(exc):
        if isinstance(exc, HTTPException):
            return jsonify(error=exc.description), exc.code
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify(TaskCalendarError().to_dict()), 500

    return app
