from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.datetime_utils import now_local
from ..core.enums import LeaveType
from ..core.exceptions import DomainError
from ..container import Container
from .model import LeaveForm
from .service import TYPE_LABELS

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    gate = container.session_gate

    @app.route("/dashboard/leave", methods=["GET", "POST"], endpoint="leave")
    @gate.login_required
    def leave():
        user = g.current_user

        if request.method == "POST":
            form = LeaveForm(
                type=request.form.get("type", ""),
                start_date=request.form.get("start_date", ""),
                end_date=request.form.get("end_date", ""),
                hours=request.form.get("hours", ""),
                reason=request.form.get("reason", ""),
            )
            try:
                container.leave_service.submit(user_id=user.user_id, form=form)
                flash("Leave request submitted", "success")
                return redirect(url_for("leave"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Leave submission failed for user %s", user.user_id)
                flash("System error while submitting the request", "danger")

        requests_ = [container.leave_service.to_ui(r) for r in container.leave_service.list_mine(user.user_id)]
        return render_template(
            "leave/index.html",
            requests=requests_,
            leave_types=[(t.value, TYPE_LABELS[t]) for t in LeaveType],
            form=request.form,
            min_start=now_local().strftime("%Y-%m-%dT00:00"),
            active_page="leave",
        )

    @app.route("/dashboard/requests", methods=["GET"], endpoint="leave_requests")
    @gate.manager_required
    def leave_requests():
        rows = container.leave_service.list_all(current_role=g.current_user.role)
        items = []
        for row in rows:
            item = container.leave_service.to_ui(row.request)
            item["full_name"] = row.full_name
            item["email"] = row.email
            items.append(item)
        return render_template("leave/requests.html", requests=items, active_page="leave_requests")

    def _decide(request_id: int, decision, message: str):
        try:
            decision()
            flash(message, "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Leave decision failed for request %s", request_id)
            flash("System error while updating the request", "danger")
        return redirect(url_for("leave_requests"))

    @app.route("/dashboard/requests/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @gate.manager_required
    def approve_leave(request_id: int):
        return _decide(
            request_id,
            lambda: container.leave_service.approve(current_role=g.current_user.role, request_id=request_id),
            "Request approved",
        )

    @app.route("/dashboard/requests/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @gate.manager_required
    def reject_leave(request_id: int):
        reason = request.form.get("rejection_reason", "")
        return _decide(
            request_id,
            lambda: container.leave_service.reject(
                current_role=g.current_user.role, request_id=request_id, rejection_reason=reason
            ),
            "Request rejected",
        )
