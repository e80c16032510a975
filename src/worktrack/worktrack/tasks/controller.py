from __future__ import annotations

import json
import logging

from flask import Flask, Response, abort, flash, g, redirect, render_template, request, stream_with_context, url_for

from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import DomainError
from ..container import Container
from .model import TaskForm
from .service import STATUS_LABELS, TASKS_TABLE

logger = logging.getLogger(__name__)

KEEP_ALIVE_SECONDS = 15


def register(app: Flask, container: Container) -> None:
    gate = container.session_gate
    tasks = container.task_service

    def _rows():
        return [tasks.to_ui(r) for r in tasks.list_for(g.current_user)]

    def _form_from_request() -> TaskForm:
        return TaskForm(
            title=request.form.get("title", ""),
            description=request.form.get("description", ""),
            due_date=request.form.get("due_date", ""),
            priority=request.form.get("priority", TaskPriority.MEDIUM.value),
            user_id=request.form.get("user_id", ""),
            expected_hours=request.form.get("expected_hours", "0"),
            expected_minutes=request.form.get("expected_minutes", "0"),
        )

    def _render_form(form: TaskForm, task_id=None):
        return render_template(
            "tasks/form.html",
            form=form,
            task_id=task_id,
            employees=tasks.list_employees(),
            priorities=[p.value for p in TaskPriority],
            active_page="tasks",
        )

    @app.route("/dashboard/tasks", methods=["GET"], endpoint="tasks")
    @gate.login_required
    def task_board():
        return render_template(
            "tasks/index.html",
            tasks=_rows(),
            statuses=[(s.value, STATUS_LABELS[s]) for s in TaskStatus],
            active_page="tasks",
        )

    @app.route("/dashboard/tasks/rows", methods=["GET"], endpoint="task_rows")
    @gate.login_required
    def task_rows():
        return render_template(
            "tasks/_rows.html",
            tasks=_rows(),
            statuses=[(s.value, STATUS_LABELS[s]) for s in TaskStatus],
        )

    @app.route("/dashboard/tasks/events", methods=["GET"], endpoint="task_events")
    @gate.login_required
    def task_events():
        def stream():
            sub = container.change_channel.subscribe(TASKS_TABLE)
            try:
                yield "retry: 3000\n\n"
                while True:
                    event = sub.get(timeout=KEEP_ALIVE_SECONDS)
                    if event is None:
                        yield ": keep-alive\n\n"
                        continue
                    yield f"event: change\ndata: {json.dumps(event.to_dict())}\n\n"
            finally:
                sub.close()

        return Response(
            stream_with_context(stream()),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @app.route("/dashboard/tasks/new", methods=["GET", "POST"], endpoint="new_task")
    @gate.manager_required
    def new_task():
        if request.method == "POST":
            form = _form_from_request()
            try:
                tasks.upsert(current_user=g.current_user, form=form)
                flash("Task created successfully", "success")
                return redirect(url_for("tasks"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Task creation failed")
                flash("System error while saving the task", "danger")
            return _render_form(form)

        return _render_form(TaskForm(title="", description="", due_date="", priority=TaskPriority.MEDIUM.value, user_id=""))

    @app.route("/dashboard/tasks/<int:task_id>/edit", methods=["GET", "POST"], endpoint="edit_task")
    @gate.manager_required
    def edit_task(task_id: int):
        if request.method == "POST":
            form = _form_from_request()
            try:
                tasks.upsert(current_user=g.current_user, form=form, task_id=task_id)
                flash("Task updated successfully", "success")
                return redirect(url_for("tasks"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Task update failed for %s", task_id)
                flash("System error while saving the task", "danger")
            return _render_form(form, task_id)

        try:
            task = tasks.get(task_id)
        except DomainError:
            abort(404)
        return _render_form(TaskForm.from_task(task), task_id)

    @app.route("/dashboard/tasks/<int:task_id>/status", methods=["POST"], endpoint="task_status")
    @gate.login_required
    def task_status(task_id: int):
        try:
            status = TaskStatus(request.form.get("status", ""))
            tasks.set_status(current_user=g.current_user, task_id=task_id, status=status)
            flash("Task status updated", "success")
        except ValueError:
            flash("Unknown task status", "danger")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Task status change failed for %s", task_id)
            flash("System error while updating the task", "danger")
        return redirect(url_for("tasks"))

    @app.route("/dashboard/tasks/<int:task_id>/delete", methods=["GET", "POST"], endpoint="delete_task")
    @gate.manager_required
    def delete_task(task_id: int):
        if request.method == "GET":
            try:
                task = tasks.get(task_id)
            except DomainError:
                abort(404)
            return render_template("tasks/confirm_delete.html", task=task, active_page="tasks")

        try:
            confirmed = request.form.get("confirm") == "yes"
            if tasks.delete(current_user=g.current_user, task_id=task_id, confirmed=confirmed):
                flash("Task deleted successfully", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Task delete failed for %s", task_id)
            flash("System error while deleting the task", "danger")
        return redirect(url_for("tasks"))
