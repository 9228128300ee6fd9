import pytest

from tardiness_tracker.core.enums import StudentStatus
from tardiness_tracker.core.exceptions import ValidationError
from tardiness_tracker.students.service import StudentService


def test_create_student_trims_and_defaults_to_active(students_repo):
    svc = StudentService(students_repo)

    sid = svc.create_student(nis=" 001 ", nama=" Ana ", kelas=" X-1 ")

    student = students_repo.get_by_id(sid)
    assert (student.nis, student.nama, student.kelas, student.status) == ("001", "Ana", "X-1", StudentStatus.ACTIVE)


def test_duplicate_nis_is_rejected_whatever_the_status(students_repo):
    students_repo.add("001", "Ana", "XII-1", StudentStatus.GRADUATED)
    svc = StudentService(students_repo)

    with pytest.raises(ValidationError):
        svc.create_student(nis="001", nama="Other", kelas="X-1")

    assert len(students_repo.by_id) == 1


@pytest.mark.parametrize("field", ["nis", "nama", "kelas"])
def test_required_fields(students_repo, field):
    data = {"nis": "001", "nama": "Ana", "kelas": "X-1", field: "  "}
    with pytest.raises(ValidationError):
        StudentService(students_repo).create_student(**data)


def test_list_students_filters_and_searches(students_repo):
    students_repo.add("001", "Ana", "X-1")
    students_repo.add("102", "Budi", "X-1", StudentStatus.INACTIVE)
    students_repo.add("103", "Anita", "X-2")
    svc = StudentService(students_repo)

    assert [s.nama for s in svc.list_students(keyword="an")] == ["Ana", "Anita"]
    assert [s.nama for s in svc.list_students(keyword="10")] == ["Budi", "Anita"]
    assert [s.nama for s in svc.list_students(kelas="X-1", status="AKTIF")] == ["Ana"]


def test_class_options_are_distinct_and_sorted(students_repo):
    students_repo.add("001", "Ana", "X-2")
    students_repo.add("002", "Budi", " X-1")
    students_repo.add("003", "Citra", "X-2")
    students_repo.add("004", "Dewi", "XII-1", StudentStatus.GRADUATED)
    svc = StudentService(students_repo)

    assert svc.class_options() == ["X-1", "X-2", "XII-1"]
    assert svc.class_options(active_only=True) == ["X-1", "X-2"]


def test_students_in_class_lists_active_only(students_repo):
    students_repo.add("001", "Ana", "X-1")
    students_repo.add("002", "Budi", "X-1", StudentStatus.INACTIVE)

    assert [s.nama for s in StudentService(students_repo).students_in_class("X-1")] == ["Ana"]
