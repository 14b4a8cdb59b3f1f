from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import current_user_id, json_errors, login_required, request_payload
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/signup", methods=["POST"], endpoint="signup")
    @json_errors
    def signup():
        data = request_payload()
        user_id = container.auth_service.sign_up(
            email=data.get("email", ""),
            password=data.get("password", ""),
            full_name=data.get("full_name"),
        )
        return jsonify({"success": True, "user_id": user_id, "message": "Account created, please log in"}), 201

    @app.route("/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        data = request_payload()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["email"] = s_user.email
        session["profile_completed"] = s_user.profile_completed

        # Clients send incomplete profiles to the profile setup screen.
        return jsonify(
            {
                "success": True,
                "user_id": s_user.user_id,
                "profile_completed": s_user.profile_completed,
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    @json_errors
    def me():
        profile = container.profile_service.get(current_user_id())
        return jsonify(
            {
                "success": True,
                "user_id": profile.user_id,
                "email": session.get("email"),
                "college_year": profile.college_year,
                "semester": profile.semester,
                "year_label": container.profile_service.year_label(profile.college_year),
                "profile_completed": profile.profile_completed,
            }
        )

    @app.route("/profile", methods=["POST"], endpoint="profile_setup")
    @login_required
    @json_errors
    def profile_setup():
        data = request_payload()
        profile = container.profile_service.complete(
            user_id=current_user_id(),
            college_year=data.get("college_year"),
            semester=data.get("semester"),
        )
        session["profile_completed"] = True
        return jsonify(
            {
                "success": True,
                "college_year": profile.college_year,
                "semester": profile.semester,
                "message": "Profile complete!",
            }
        )
