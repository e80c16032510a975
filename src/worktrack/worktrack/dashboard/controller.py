from __future__ import annotations

from flask import Flask, g, render_template

from ..container import Container


def register(app: Flask, container: Container) -> None:
    gate = container.session_gate

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @gate.login_required
    def dashboard():
        stats = container.dashboard_service.summary(g.current_user.user_id)
        return render_template("dashboard/index.html", stats=stats, active_page="dashboard")
