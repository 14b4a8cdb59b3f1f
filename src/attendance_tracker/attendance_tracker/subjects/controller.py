from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, json_errors, login_required, request_payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    @json_errors
    def dashboard():
        data = container.dashboard_service.build(owner_id=current_user_id())
        return jsonify({"success": True, "subjects": [card.to_dict() for card in data.cards]})

    @app.route("/subjects", methods=["POST"], endpoint="add_subject")
    @login_required
    @json_errors
    def add_subject():
        data = request_payload()
        subject = container.subject_service.create(owner_id=current_user_id(), name=data.get("name", ""))
        return (
            jsonify(
                {
                    "success": True,
                    "subject_id": subject.subject_id,
                    "name": subject.name,
                    "message": f"{subject.name} has been added.",
                }
            ),
            201,
        )

    @app.route("/subjects/<int:subject_id>", methods=["DELETE"], endpoint="delete_subject")
    @login_required
    @json_errors
    def delete_subject(subject_id: int):
        container.subject_service.delete(owner_id=current_user_id(), subject_id=subject_id)
        return jsonify({"success": True, "message": "The subject and all its records have been deleted."})
