from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..common.web import current_user_id, json_errors, login_required, request_payload
from ..container import Container
from ..core.enums import FlowAnswer
from ..core.exceptions import ValidationError
from .flow import AttendanceFlow, FlowState, accepted_answers

# Key of the in-progress workflow in the Flask session.
FLOW_SESSION_KEY = "attendance_flow"


def register(app: Flask, container: Container) -> None:
    def _flow_json(flow: AttendanceFlow) -> dict:
        return {
            "success": True,
            "done": False,
            "subject_id": flow.subject_id,
            "step": flow.step.value,
            "selected_date": flow.state.to_dict()["selected_date"],
            "accepts": accepted_answers(flow.step),
        }

    def _save_flow(flow: AttendanceFlow) -> None:
        session[FLOW_SESSION_KEY] = {"subject_id": flow.subject_id, "state": flow.state.to_dict()}

    def _load_flow(subject_id: int) -> AttendanceFlow:
        stored = session.get(FLOW_SESSION_KEY)
        if not stored or int(stored.get("subject_id", 0)) != int(subject_id):
            raise ValidationError("No attendance entry in progress for this subject")
        return container.attendance_service.resume_flow(
            owner_id=current_user_id(),
            subject_id=subject_id,
            state=FlowState.from_dict(stored.get("state") or {}),
        )

    def _parse_answer(data: dict):
        if "date" in data:
            raw = data.get("date")
            return parse_iso_date(raw) if raw else None

        raw = data.get("answer")
        if raw is not None and not isinstance(raw, str):
            raise ValidationError("Answer must be a string")
        raw = (raw or "").strip().lower()
        if not raw:
            return None
        try:
            return FlowAnswer(raw)
        except ValueError:
            raise ValidationError(f"Unknown answer: {raw!r}")

    @app.route("/subjects/<int:subject_id>", methods=["GET"], endpoint="subject_detail")
    @login_required
    @json_errors
    def subject_detail(subject_id: int):
        detail = container.attendance_service.subject_detail(owner_id=current_user_id(), subject_id=subject_id)
        return jsonify(
            {
                "success": True,
                "subject": {
                    "subject_id": detail.subject.subject_id,
                    "name": detail.subject.name,
                    "created_at": detail.subject.created_at.isoformat() if detail.subject.created_at else None,
                },
                "stats": detail.stats.to_dict(),
                "records": container.attendance_service.history_ui(detail.records),
            }
        )

    @app.route("/subjects/<int:subject_id>/flow", methods=["POST"], endpoint="start_attendance_flow")
    @login_required
    @json_errors
    def start_attendance_flow(subject_id: int):
        flow = container.attendance_service.start_flow(owner_id=current_user_id(), subject_id=subject_id)
        _save_flow(flow)
        return jsonify(_flow_json(flow))

    @app.route("/subjects/<int:subject_id>/flow/answer", methods=["POST"], endpoint="answer_attendance_flow")
    @login_required
    @json_errors
    def answer_attendance_flow(subject_id: int):
        flow = _load_flow(subject_id)
        data = request_payload()

        # On any error the stored state is not touched, so the client can retry.
        record = flow.answer(_parse_answer(data))
        if record is None:
            _save_flow(flow)
            return jsonify(_flow_json(flow))

        session.pop(FLOW_SESSION_KEY, None)
        return jsonify(
            {
                "success": True,
                "done": True,
                "record": container.attendance_service.history_ui([record])[0],
                "message": f"Marked as {record.status.value} for {format_iso_date(record.record_date)}",
            }
        )

    @app.route("/subjects/<int:subject_id>/flow", methods=["DELETE"], endpoint="cancel_attendance_flow")
    @login_required
    @json_errors
    def cancel_attendance_flow(subject_id: int):
        flow = _load_flow(subject_id)
        flow.cancel()
        session.pop(FLOW_SESSION_KEY, None)
        return jsonify({"success": True, "cancelled": True})

    @app.route("/records/<int:record_id>", methods=["DELETE"], endpoint="delete_record")
    @login_required
    @json_errors
    def delete_record(record_id: int):
        container.attendance_service.delete_record(owner_id=current_user_id(), record_id=record_id)
        return jsonify({"success": True, "message": "Attendance record has been removed."})
