from __future__ import annotations

from functools import wraps

from flask import flash, g, redirect, session, url_for

from .service import AuthService


class SessionGate:
    """Guards protected views.

    Every protected request re-reads the session user from the store; a
    single failed lookup ends the request with a redirect to the login page.
    """

    def __init__(self, auth: AuthService):
        self._auth = auth

    def _load(self):
        user = self._auth.get_session(session.get("user_id"))
        if user is None:
            session.pop("user_id", None)
            return None
        g.current_user = user
        return user

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if self._load() is None:
                flash("Please sign in to continue", "warning")
                return redirect(url_for("login"))
            return view(*args, **kwargs)

        return wrapper

    def manager_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = self._load()
            if user is None:
                flash("Please sign in to continue", "warning")
                return redirect(url_for("login"))
            if not user.is_manager:
                flash("Only managers can access this page", "danger")
                return redirect(url_for("dashboard"))
            return view(*args, **kwargs)

        return wrapper
