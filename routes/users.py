"""Public writer profiles and follow actions."""

from flask import Blueprint, jsonify

from middleware.auth import current_user_id, login_required
from services.follower_service import follow_writer, get_profile
from utils.serialization import serialize

users_bp = Blueprint("users", __name__)


@users_bp.get("/api/users/<user_id>")
def api_get_profile(user_id: str):
    return jsonify({"success": True, "data": serialize(get_profile(user_id))})


@users_bp.post("/api/users/follow/<writer_id>")
@login_required
def api_follow_writer(writer_id: str):
    relationship = follow_writer(current_user_id(), writer_id)
    return jsonify({
        "success": True,
        "message": "You are now following this writer",
        "data": serialize(relationship),
    }), 201
