# routes/auth.py
from flask import Blueprint, jsonify, session

from middleware.auth import SESSION_USER_KEY, login_required
from middleware.errors import AuthenticationError
from services.auth_service import authenticate, register_user
from utils.request_body import json_body
from utils.serialization import serialize

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/api/auth/register")
def register():
    data = json_body()
    profile = register_user(data)
    session[SESSION_USER_KEY] = profile.id
    return jsonify({
        "success": True,
        "message": "Account created successfully",
        "user": serialize(profile),
    }), 201


@auth_bp.post("/api/auth/login")
def login():
    data = json_body()
    profile = authenticate(data.get("email", ""), data.get("password", ""))
    if not profile:
        raise AuthenticationError("Invalid email or password.")

    session.clear()
    session[SESSION_USER_KEY] = profile.id
    return jsonify({
        "success": True,
        "message": "Login successfully",
        "user": serialize(profile),
    })


@auth_bp.post("/api/auth/logout")
@login_required
def logout():
    session.clear()
    return jsonify({"success": True, "message": "You have been logged out."})
