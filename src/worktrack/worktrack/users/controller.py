from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, request, session, url_for

from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

RESET_SESSION_KEY = "reset_user_id"


def register(app: Flask, container: Container) -> None:
    gate = container.session_gate

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return redirect(url_for("login"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if container.auth_service.get_session(session.get("user_id")):
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            try:
                user = container.auth_service.sign_in(email, password)
                session.clear()
                session["user_id"] = user.user_id
                flash("Signed in successfully", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Sign-in failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while signing in: {e}", "danger")
                else:
                    flash("System error while signing in", "danger")

        return render_template("auth/login.html", email=request.form.get("email", ""))

    @app.route("/login/forgot", methods=["POST"], endpoint="forgot_password")
    def forgot_password():
        try:
            container.auth_service.request_password_reset(
                request.form.get("email", ""),
                reset_url_builder=lambda token: url_for("reset_password", token=token, _external=True),
            )
            flash("If that address is registered, a reset link is on its way", "info")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Password reset request failed")
            flash("System error while sending the reset e-mail", "danger")
        return redirect(url_for("login"))

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_account():
        if request.method == "POST":
            try:
                container.auth_service.sign_up(
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                    confirm_password=request.form.get("confirm_password", ""),
                    full_name=request.form.get("full_name", ""),
                    phone=request.form.get("phone", ""),
                )
                flash("Registration successful, please sign in", "success")
                return redirect(url_for("login"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Registration failed")
                flash("System error while registering", "danger")

        return render_template("auth/register.html", form=request.form)

    @app.route("/reset-password", methods=["GET", "POST"], endpoint="reset_password")
    def reset_password():
        token = request.args.get("token")
        if token:
            try:
                session.clear()
                session[RESET_SESSION_KEY] = container.auth_service.verify_reset_token(token)
            except AuthenticationError as e:
                flash(str(e), "danger")
                return redirect(url_for("login"))
            # Drop the token from the address bar.
            return redirect(url_for("reset_password"))

        user_id = session.get(RESET_SESSION_KEY)
        if not user_id:
            flash("Password reset link is invalid", "danger")
            return redirect(url_for("login"))

        if request.method == "POST":
            try:
                container.auth_service.update_password(
                    user_id=int(user_id),
                    new_password=request.form.get("password", ""),
                    confirm_password=request.form.get("confirm_password", ""),
                )
                session.clear()
                flash("Password updated, please sign in", "success")
                return redirect(url_for("login"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Password update failed for user %s", user_id)
                flash("System error while updating the password", "danger")

        return render_template("auth/reset_password.html")

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        flash("Signed out", "info")
        return redirect(url_for("login"))

    @app.route("/dashboard/settings", methods=["GET"], endpoint="settings")
    @gate.login_required
    def settings():
        profile = container.profile_service.get(g.current_user.user_id)
        return render_template("dashboard/settings.html", profile=profile, active_page="settings")

    @app.route("/dashboard/settings/profile", methods=["POST"], endpoint="update_profile")
    @gate.login_required
    def update_profile():
        try:
            container.profile_service.update_full_name(g.current_user.user_id, request.form.get("full_name", ""))
            flash("Profile updated successfully", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Profile update failed for user %s", g.current_user.user_id)
            flash("System error while updating the profile", "danger")
        return redirect(url_for("settings"))
