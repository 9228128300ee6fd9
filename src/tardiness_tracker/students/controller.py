from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_object
from ..core.exceptions import ValidationError
from ..container import Container
from .importer import ImportResult
from .model import RosterRow, Student


def student_json(s: Student) -> dict:
    return {"id": s.student_id, "nis": s.nis, "nama": s.nama, "kelas": s.kelas, "status": s.status.value}


def roster_row_json(r: RosterRow) -> dict:
    return {"nis": r.nis, "nama": r.nama, "kelas": r.kelas, "status": r.status.value}


def import_result_json(r: ImportResult) -> dict:
    return {
        "ok": r.ok,
        "total_rows": r.total_rows,
        "succeeded": r.succeeded,
        "batches_total": r.batches_total,
        "failed_batch": r.failed_batch,
        "error": r.error,
    }


def _roster_text() -> str:
    """CSV from a multipart `file` field, or the raw request body."""
    upload = request.files.get("file")
    raw = upload.read() if upload else request.get_data()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError("Roster file must be UTF-8 text")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    def students_list():
        rows = container.student_service.list_students(
            keyword=request.args.get("q", ""),
            kelas=request.args.get("kelas"),
            status=request.args.get("status") or None,
        )
        return jsonify({"students": [student_json(s) for s in rows]})

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    def students_create():
        data = json_object()
        student_id = container.student_service.create_student(
            nis=data.get("nis", ""),
            nama=data.get("nama", ""),
            kelas=data.get("kelas", ""),
            status=data.get("status") or "AKTIF",
        )
        return jsonify({"id": student_id}), 201

    @app.route("/api/students/classes", methods=["GET"], endpoint="students_classes")
    def students_classes():
        active_only = request.args.get("active", "0") in {"1", "true", "yes"}
        return jsonify({"classes": container.student_service.class_options(active_only=active_only)})

    @app.route("/api/students/active", methods=["GET"], endpoint="students_active_in_class")
    def students_active_in_class():
        rows = container.student_service.students_in_class(request.args.get("kelas", ""))
        return jsonify({"students": [student_json(s) for s in rows]})

    @app.route("/api/students/<int:student_id>/status", methods=["POST"], endpoint="students_set_status")
    def students_set_status(student_id: int):
        data = json_object()
        affected = container.lifecycle.set_status(student_id, data.get("status", ""))
        return jsonify({"affected": affected})

    @app.route("/api/students/promote", methods=["POST"], endpoint="students_promote")
    def students_promote():
        data = json_object()
        affected = container.lifecycle.promote_class(data.get("from_class", ""), data.get("to_class", ""))
        return jsonify({"affected": affected})

    @app.route("/api/students/graduate", methods=["POST"], endpoint="students_graduate")
    def students_graduate():
        data = json_object()
        affected = container.lifecycle.graduate_class(data.get("kelas", ""))
        return jsonify({"affected": affected})

    @app.route("/api/students/graduation-classes", methods=["GET"], endpoint="students_graduation_classes")
    def students_graduation_classes():
        return jsonify({"classes": container.lifecycle.senior_classes(request.args.get("prefix") or None)})

    @app.route("/api/students/graduate-all", methods=["POST"], endpoint="students_graduate_all")
    def students_graduate_all():
        data = json_object()
        result = container.lifecycle.graduate_all_senior_classes(data.get("prefix") or None)
        return jsonify({"classes": list(result.classes), "affected": result.affected})

    @app.route("/api/students/import/preview", methods=["POST"], endpoint="students_import_preview")
    def students_import_preview():
        preview = container.importer.preview(_roster_text())
        return jsonify({"total_rows": preview.total_rows, "rows": [roster_row_json(r) for r in preview.rows]})

    @app.route("/api/students/import", methods=["POST"], endpoint="students_import")
    def students_import():
        result = container.importer.import_text(_roster_text())
        return jsonify(import_result_json(result)), (200 if result.ok else 502)
