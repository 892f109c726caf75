from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int, require_non_empty
from ..common.web import current_role, current_user_id, login_required, success
from ..core.enums import WorkLogStatus
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/work-log", methods=["POST"], endpoint="work_log_store")
    @login_required
    def work_log_store():
        data = request.get_json(silent=True) or {}
        status = WorkLogStatus.parse(data.get("status"))
        event = container.work_log_service.record_transition(current_user_id(), status)
        return success(event.to_dict(), "Work log recorded")

    @app.route("/api/work-log/today", methods=["GET"], endpoint="work_log_today")
    @login_required
    def work_log_today():
        snapshot = container.work_log_service.today_status(current_user_id())
        return success(snapshot.to_dict())

    @app.route("/api/work-log/calculate", methods=["GET"], endpoint="work_log_calculate")
    @login_required
    def work_log_calculate():
        start = parse_iso_date(require_non_empty(request.args.get("date", ""), "Date"))
        end_s = request.args.get("end_date")
        end = parse_iso_date(end_s) if end_s else None

        user_id = container.report_service.resolve_target_user(
            current_user_id=current_user_id(),
            current_role=current_role(),
            requested_user_id=optional_int(request.args.get("user_id"), "User id"),
        )
        days = container.work_log_service.worked_minutes_by_date_range(user_id, start, end)
        return success([d.to_dict() for d in days.values()])
