from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import RosterRow, Student
from .repository import StudentRepository

_COLUMNS = "id, nis, nama, kelas, status"


def _to_student(row: dict) -> Student:
    return Student(
        student_id=int(row["id"]),
        nis=row["nis"],
        nama=row["nama"],
        kelas=row["kelas"],
        status=StudentStatus(row["status"]),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def get_by_nis(self, nis: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE nis=%s", (nis,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def create_student(self, *, nis: str, nama: str, kelas: str, status: StudentStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO students(nis, nama, kelas, status) VALUES(%s,%s,%s,%s)",
                (nis, nama, kelas, status.value),
            )
            return int(cur.lastrowid)

    def list_students(
        self,
        *,
        kelas: Optional[str] = None,
        status: Optional[StudentStatus] = None,
        limit: int = 800,
    ) -> Sequence[Student]:
        clauses = ["1=1"]
        params: list[object] = []
        if kelas:
            clauses.append("kelas=%s")
            params.append(kelas)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM students
                WHERE {" AND ".join(clauses)}
                ORDER BY kelas ASC, nama ASC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def list_class_labels(self, *, status: Optional[StudentStatus] = None) -> Sequence[Optional[str]]:
        with db_cursor(self._conn_factory) as (_, cur):
            if status is None:
                cur.execute("SELECT DISTINCT kelas FROM students")
            else:
                cur.execute("SELECT DISTINCT kelas FROM students WHERE status=%s", (status.value,))
            return [r["kelas"] for r in fetchall(cur)]

    def set_status(self, student_id: int, status: StudentStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET status=%s WHERE id=%s", (status.value, int(student_id)))
            return int(cur.rowcount)

    def reassign_class(self, *, from_class: str, to_class: str, where_status: StudentStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET kelas=%s WHERE kelas=%s AND status=%s",
                (to_class, from_class, where_status.value),
            )
            return int(cur.rowcount)

    def set_status_for_classes(
        self,
        *,
        classes: Sequence[str],
        status: StudentStatus,
        where_status: StudentStatus,
    ) -> int:
        if not classes:
            return 0
        placeholders = ",".join(["%s"] * len(classes))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE students SET status=%s WHERE kelas IN ({placeholders}) AND status=%s",
                (status.value, *classes, where_status.value),
            )
            return int(cur.rowcount)

    def upsert_by_nis(self, rows: Sequence[RosterRow]) -> int:
        if not rows:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO students(nis, nama, kelas, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE nama=VALUES(nama), kelas=VALUES(kelas), status=VALUES(status)
                """,
                [(r.nis, r.nama, r.kelas, r.status.value) for r in rows],
            )
            return len(rows)
