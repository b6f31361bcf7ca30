"""
__init__.py – Fit Lab Scheduling Backend
────────────────────────────────────────────────────────────
Initialises the Flask app and registers the feature blueprints.

✅ Includes:
 • schedule_router → admin class calendar, class form validation,
                     PT rota suggestions
────────────────────────────────────────────────────────────
"""

import logging
from flask import Flask

from .config import LOG_LEVEL

log = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# Flask App Factory
# ─────────────────────────────────────────────────────────────
def create_app():
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # ── Configure logging ───────────────────────────────
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # ── Register Blueprints ─────────────────────────────
    from .schedule_router import bp as schedule_bp

    app.register_blueprint(schedule_bp, url_prefix="/schedule")

    # ── Initialise DB tables ────────────────────────────
    from .db import init_db

    with app.app_context():
        try:
            init_db()
            log.info("[DB] Tables created / verified")
        except Exception:
            log.exception("[DB] Failed to initialise")

    # ── Root health check ───────────────────────────────
    @app.route("/health", methods=["GET"])
    def health_root():
        return {"status": "ok", "service": "Fit Lab Scheduling Backend"}, 200

    return app
