from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, url_for

from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    gate = container.session_gate

    @app.route("/dashboard/attendance", methods=["GET"], endpoint="attendance")
    @gate.login_required
    def attendance():
        state = container.attendance_service.fetch_state(g.current_user.user_id)
        return render_template(
            "dashboard/attendance.html",
            is_checked_in=state.is_checked_in,
            current=state.current,
            data=[container.attendance_service.to_ui(r) for r in state.history],
            active_page="attendance",
        )

    @app.route("/dashboard/attendance/toggle", methods=["POST"], endpoint="toggle_attendance")
    @gate.login_required
    def toggle_attendance():
        try:
            record = container.attendance_service.toggle(g.current_user.user_id)
            if record.is_open:
                flash("Checked in successfully", "success")
            else:
                flash(f"Checked out successfully ({record.total_hours:.2f} h)", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Attendance toggle failed for user %s", g.current_user.user_id)
            flash("System error while recording attendance", "danger")
        return redirect(url_for("attendance"))
