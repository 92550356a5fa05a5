# middleware/auth.py
from functools import wraps

from flask import g, session

from middleware.errors import AuthenticationError


SESSION_USER_KEY = "user_id"


def login_required(view_func):
    """Decorator that requires a logged-in user (session['user_id']).

    The identity is exposed to the view through ``g.user_id`` so handlers can
    pass it explicitly to the services.
    """
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        user_id = session.get(SESSION_USER_KEY)
        if not user_id:
            raise AuthenticationError("Please log in to continue.")
        g.user_id = user_id
        return view_func(*args, **kwargs)
    return wrapper


def current_user_id() -> str:
    """Return the identity attached by ``login_required``."""
    user_id = g.get("user_id")
    if not user_id:
        raise AuthenticationError()
    return user_id
