from __future__ import annotations

from flask import Flask, flash, g, redirect, request, url_for

from ..container import Container
from .translations import translator


def register(app: Flask, container: Container) -> None:
    store = container.preference_store

    @app.before_request
    def load_preferences():
        g.preferences = store.load(request.cookies)

    @app.context_processor
    def inject_preferences():
        prefs = getattr(g, "preferences", store.defaults)
        return {
            "preferences": prefs,
            "t": translator(prefs.language),
            "current_user": getattr(g, "current_user", None),
        }

    @app.route("/dashboard/settings/preferences", methods=["POST"], endpoint="update_preferences")
    @container.session_gate.login_required
    def update_preferences():
        prefs = store.parse_update(g.preferences, request.form)
        g.preferences = prefs
        flash("Preferences saved", "success")
        return store.save(redirect(url_for("settings")), prefs)
