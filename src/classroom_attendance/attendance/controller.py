from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.http import error_response, login_required
from ..core.exceptions import MissingRequiredField
from ..container import Container
from .model import TimeRange


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _write_csv(*, data):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=data.fieldnames)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={data.filename}"},
        )

    def _require_date():
        date = request.args.get("date")
        if not date:
            raise MissingRequiredField("date")
        return date

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        try:
            date = _require_date()
            return jsonify(service.get_marks_with_students(date, request.args.get("period")))
        except Exception as e:
            return error_response(e, action="fetch attendance")

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        body = request.get_json(silent=True) or {}
        try:
            mark = service.mark_attendance(
                student_id=body.get("studentId"),
                date=body.get("date"),
                period=body.get("period"),
                status=body.get("status"),
                time_range=TimeRange.from_payload(body.get("timeRange")),
            )
            return jsonify(mark.to_dict()), 201
        except Exception as e:
            return error_response(e, action="mark attendance")

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="attendance_bulk")
    @login_required
    def attendance_bulk():
        body = request.get_json(silent=True) or {}
        try:
            result = service.mark_attendance_bulk(
                date=body.get("date"),
                period=body.get("period"),
                status_by_student=body.get("studentsStatus"),
                time_range=TimeRange.from_payload(body.get("timeRange")),
            )
            return jsonify({"message": "Bulk attendance marked", "written": result.written, "hours": result.hours}), 201
        except Exception as e:
            return error_response(e, action="bulk mark attendance")

    @app.route("/api/attendance/preview", methods=["POST"], endpoint="attendance_preview")
    @login_required
    def attendance_preview():
        body = request.get_json(silent=True) or {}
        try:
            return jsonify(
                service.preview(
                    date=body.get("date"),
                    period=body.get("period"),
                    local_edits=body.get("studentsStatus") or {},
                    time_range=TimeRange.from_payload(body.get("timeRange")),
                )
            )
        except Exception as e:
            return error_response(e, action="preview attendance")

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    def attendance_stats():
        try:
            return jsonify(service.get_day_overview(_require_date()))
        except Exception as e:
            return error_response(e, action="compute attendance stats")

    @app.route("/api/attendance/students/<student_id>", methods=["GET"], endpoint="attendance_student_day")
    @login_required
    def attendance_student_day(student_id: str):
        try:
            return jsonify(service.get_student_day(_require_date(), student_id).to_dict())
        except Exception as e:
            return error_response(e, action="compute student attendance")

    @app.route("/api/attendance/week", methods=["GET"], endpoint="attendance_week")
    @login_required
    def attendance_week():
        try:
            return jsonify(service.get_week_summary(_require_date()))
        except Exception as e:
            return error_response(e, action="compute week summary")

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="attendance_export")
    @login_required
    def attendance_export():
        try:
            data = service.build_export(
                view=request.args.get("view"),
                date=_require_date(),
                period=request.args.get("period"),
            )
            return _write_csv(data=data)
        except Exception as e:
            return error_response(e, action="export attendance")
