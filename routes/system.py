"""System endpoints (health check)."""

import logging

from flask import Blueprint, jsonify
from pymongo.errors import PyMongoError

from config.database import mongodb

logger = logging.getLogger(__name__)

system_bp = Blueprint("system", __name__)


@system_bp.route("/health", methods=["GET"])
def health_check():
    """Simple health-check route without authentication."""
    try:
        mongodb.ping()
        db_status = "ok"
    except (PyMongoError, RuntimeError) as e:
        logger.warning("Health check could not reach MongoDB: %s", e)
        db_status = f"error: {str(e)}"

    return jsonify({
        "status": "ok",
        "database": db_status,
    }), 200
