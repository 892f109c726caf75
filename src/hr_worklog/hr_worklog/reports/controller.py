from __future__ import annotations

import csv
import io

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int, require_non_empty
from ..common.web import current_role, current_user_id, login_required, success
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _report_filters() -> dict:
        start = parse_iso_date(require_non_empty(request.args.get("start_date", ""), "Start date"))
        end = parse_iso_date(require_non_empty(request.args.get("end_date", ""), "End date"))
        user_id = container.report_service.resolve_target_user(
            current_user_id=current_user_id(),
            current_role=current_role(),
            requested_user_id=optional_int(request.args.get("user_id"), "User id"),
        )
        return {"user_id": user_id, "start_date": start, "end_date": end}

    @app.route("/api/work-log/reports", methods=["GET"], endpoint="work_log_reports")
    @login_required
    def work_log_reports():
        page = container.report_service.query_reports(
            **_report_filters(),
            page=optional_int(request.args.get("page"), "Page number"),
            per_page=optional_int(request.args.get("per_page"), "Items per page"),
        )
        return success([s.to_dict() for s in page.items], meta=page.meta())

    @app.route("/api/work-log/reports.csv", methods=["GET"], endpoint="work_log_reports_csv")
    @login_required
    def work_log_reports_csv():
        filters = _report_filters()
        data = container.report_service.build_export(**filters)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=["work_date", "user_id", "total_minutes", "worked_hours", "notes"])
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        start, end = filters["start_date"], filters["end_date"]
        filename = f"work_log_{filters['user_id']}_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/work-log/reports/<int:report_id>/notes", methods=["PATCH"], endpoint="work_log_report_notes")
    @login_required
    def work_log_report_notes(report_id: int):
        data = request.get_json(silent=True) or {}
        summary = container.report_service.update_notes(
            current_user_id=current_user_id(),
            current_role=current_role(),
            summary_id=report_id,
            notes=data.get("notes"),
        )
        return success(summary.to_dict(), "Notes updated")
