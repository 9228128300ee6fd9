from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_object
from ..common.validators import optional_text
from ..core.exceptions import ValidationError
from ..container import Container
from ..reports.service import RecapReport
from .aggregation import TallyEntry
from .model import AttendanceEvent, NewAttendanceEvent
from .time_rules import format_duration, late_minutes


def event_json(e: AttendanceEvent) -> dict:
    return {
        "id": e.event_id,
        "tanggal": e.event_date.isoformat(),
        "jam_datang": e.arrival_time,
        "student_id": e.student.student_id,
        "nis": e.student.nis,
        "nama": e.student.nama,
        "kelas": e.student.kelas,
        "alasan": e.reason,
        "catatan": e.note,
    }


def tally_json(t: TallyEntry) -> dict:
    return {"nis": t.nis, "nama": t.nama, "kelas": t.kelas, "count": t.count}


def recap_json(report: RecapReport) -> dict:
    return {
        "start": report.start.isoformat(),
        "end": report.end.isoformat(),
        "kelas": report.kelas,
        "total": report.total,
        "unique_students": report.unique_students,
        "period": report.period_label,
        "rows": [
            {**event_json(r.event), "late_minutes": r.late_minutes, "late_label": r.late_label}
            for r in report.rows
        ],
        "candidates": [tally_json(c) for c in report.candidates],
    }


def _int_arg(name: str) -> int:
    try:
        return int(request.args.get(name, ""))
    except ValueError:
        raise ValidationError(f"{name} must be a number")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_record")
    def attendance_record():
        data = json_object()
        raw_date = optional_text(data.get("tanggal"), "Date")
        student_id = data.get("student_id")
        if student_id not in (None, ""):
            try:
                student_id = int(student_id)
            except (TypeError, ValueError):
                raise ValidationError("student_id must be a number")

        recorded = container.recorder.record(
            NewAttendanceEvent(
                kelas=data.get("kelas", ""),
                student_id=student_id,
                arrival_time=data.get("jam_datang", ""),
                event_date=parse_iso_date(raw_date) if raw_date else None,
                reason=data.get("alasan"),
                note=data.get("catatan"),
                recorded_by=data.get("recorded_by"),
            )
        )
        return (
            jsonify(
                {
                    "event": event_json(recorded.event),
                    "late_minutes": recorded.late_minutes,
                    "late_label": format_duration(recorded.late_minutes),
                    "total_occurrences": recorded.total_occurrences,
                    "warning": recorded.warning,
                }
            ),
            201,
        )

    @app.route("/api/attendance/lateness", methods=["GET"], endpoint="attendance_lateness")
    def attendance_lateness():
        minutes = late_minutes(request.args.get("jam", ""), container.config.late_cutoff)
        return jsonify({"cutoff": container.config.late_cutoff, "late_minutes": minutes, "late_label": format_duration(minutes)})

    @app.route("/api/attendance/recap", methods=["GET"], endpoint="attendance_recap")
    def attendance_recap():
        kelas = request.args.get("kelas") or None
        if request.args.get("month"):
            report = container.recap_service.build_monthly_recap(
                year=_int_arg("year"), month=_int_arg("month"), kelas=kelas
            )
        else:
            report = container.recap_service.build_recap(
                start=parse_iso_date(request.args.get("start", "")),
                end=parse_iso_date(request.args.get("end", "")),
                kelas=kelas,
            )
        return jsonify(recap_json(report))
