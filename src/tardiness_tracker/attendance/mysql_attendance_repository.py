from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, format_mysql_time
from .model import AttendanceEvent, StudentSnapshot
from .repository import AttendanceEventRepository


def _to_event(r: dict) -> AttendanceEvent:
    return AttendanceEvent(
        event_id=int(r["id"]),
        event_date=r["tanggal"],
        arrival_time=format_mysql_time(r["jam_datang"]),
        student=StudentSnapshot(
            student_id=int(r["student_id"]) if r.get("student_id") is not None else None,
            nis=r.get("nis"),
            nama=r["nama"],
            kelas=r["kelas"],
        ),
        reason=r.get("alasan"),
        note=r.get("catatan"),
        recorded_by=r.get("created_by"),
    )


class MySQLAttendanceRepository(AttendanceEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_event(
        self,
        *,
        event_date: date,
        arrival_time: str,
        student: StudentSnapshot,
        reason: Optional[str] = None,
        note: Optional[str] = None,
        recorded_by: Optional[str] = None,
    ) -> AttendanceEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO late_attendance(tanggal, jam_datang, student_id, nis, nama, kelas, alasan, catatan, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event_date,
                    arrival_time,
                    student.student_id,
                    student.nis,
                    student.nama,
                    student.kelas,
                    reason,
                    note,
                    recorded_by,
                ),
            )
            event_id = int(cur.lastrowid)

        return AttendanceEvent(
            event_id=event_id,
            event_date=event_date,
            arrival_time=arrival_time,
            student=student,
            reason=reason,
            note=note,
            recorded_by=recorded_by,
        )

    def count_for_student(self, student_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM late_attendance WHERE student_id=%s", (int(student_id),))
            row = cur.fetchone()
            return int(row["total"]) if row else 0

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        kelas: Optional[str] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses = ["tanggal BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if kelas:
            clauses.append("kelas=%s")
            params.append(kelas)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, tanggal, jam_datang, student_id, nis, nama, kelas, alasan, catatan, created_by
                FROM late_attendance
                WHERE {" AND ".join(clauses)}
                ORDER BY tanggal DESC, jam_datang DESC
                """,
                tuple(params),
            )
            return [_to_event(r) for r in fetchall(cur)]
