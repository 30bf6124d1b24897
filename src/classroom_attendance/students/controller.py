from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, login_required
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @login_required
    def students_list():
        try:
            return jsonify([s.to_dict() for s in service.list_students()])
        except Exception as e:
            return error_response(e, action="fetch students")

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @login_required
    def students_create():
        try:
            student = service.create(request.get_json(silent=True) or {})
            return jsonify(student.to_dict()), 201
        except Exception as e:
            return error_response(e, action="add student")

    @app.route("/api/students/bulk", methods=["POST"], endpoint="students_bulk")
    @login_required
    def students_bulk():
        try:
            body = request.get_json(silent=True)
            if not isinstance(body, list):
                raise ValidationError("Expected a list of students")
            saved = service.create_many(body)
            return jsonify([s.to_dict() for s in saved]), 201
        except Exception as e:
            return error_response(e, action="add students")

    @app.route("/api/students/import", methods=["POST"], endpoint="students_import")
    @login_required
    def students_import():
        try:
            upload = request.files.get("file")
            if upload is None:
                raise ValidationError("CSV file is required")
            text = upload.read().decode("utf-8-sig")
            saved = service.import_csv(text)
            return jsonify({"imported": len(saved), "students": [s.to_dict() for s in saved]}), 201
        except UnicodeDecodeError:
            return jsonify({"message": "CSV must be UTF-8 encoded"}), 400
        except Exception as e:
            return error_response(e, action="import students")

    @app.route("/api/students/seats", methods=["GET"], endpoint="students_seats")
    @login_required
    def students_seats():
        try:
            matrix = service.seat_matrix()
            return jsonify([[s.to_dict() if s else None for s in row] for row in matrix])
        except Exception as e:
            return error_response(e, action="fetch seats")

    @app.route("/api/students/many", methods=["DELETE"], endpoint="students_delete_all")
    @login_required
    def students_delete_all():
        try:
            deleted = service.delete_all()
            return jsonify({"message": f"Deleted {deleted} students and all attendance records"})
        except Exception as e:
            return error_response(e, action="delete students")

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="students_update")
    @login_required
    def students_update(student_id: str):
        try:
            student = service.update(student_id, request.get_json(silent=True) or {})
            return jsonify(student.to_dict())
        except Exception as e:
            return error_response(e, action="update student")

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @login_required
    def students_delete(student_id: str):
        try:
            service.delete(student_id)
            return jsonify({"message": "Student deleted"})
        except Exception as e:
            return error_response(e, action="delete student")
