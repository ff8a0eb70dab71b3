from task_calendar.app import create_app
from task_calendar.utils.db import close_store

# Module-level `app` for WSGI servers (gunicorn expects `task_calendar.wsgi:app`).
# The factory runs at import time, which opens the configured store.
app = create_app()


if __name__ == "__main__":
    # Local development only: run the built-in server.
    try:
        app.run(
            host=app.config["HOST"],
            port=app.config["PORT"],
            debug=app.config["DEBUG"],
        )
    finally:
        close_store(app)
