from datetime import date

from conftest import make_event

from tardiness_tracker.attendance.aggregation import classify, identity_of, tally
from tardiness_tracker.attendance.model import StudentSnapshot

ANA = StudentSnapshot(student_id=1, nis="001", nama="Ana", kelas="X-1")
BUDI = StudentSnapshot(student_id=2, nis="002", nama="Budi", kelas="X-1")
CITRA = StudentSnapshot(student_id=3, nis="003", nama="Citra", kelas="X-2")


def _events(*pairs):
    out = []
    for student, n in pairs:
        for _ in range(n):
            out.append(make_event(len(out) + 1, student))
    return out


def test_classify_keeps_only_students_at_or_above_threshold():
    offenses = tally(_events((ANA, 10), (BUDI, 4)))

    flagged = classify(offenses, 5)

    assert [(e.nama, e.count) for e in flagged] == [("Ana", 10)]


def test_threshold_is_inclusive():
    offenses = tally(_events((ANA, 5), (BUDI, 4)))
    assert [e.nama for e in classify(offenses, 5)] == ["Ana"]


def test_entries_follow_first_appearance_and_ranking_is_stable():
    events = [
        make_event(1, BUDI),
        make_event(2, ANA),
        make_event(3, CITRA),
        make_event(4, ANA),
        make_event(5, CITRA),
    ]
    offenses = tally(events)

    assert [e.nama for e in offenses.entries()] == ["Budi", "Ana", "Citra"]
    # Ana and Citra tie at 2: Ana appeared first and stays ahead.
    assert [(e.nama, e.count) for e in offenses.ranked()] == [("Ana", 2), ("Citra", 2), ("Budi", 1)]


def test_rows_without_student_reference_group_by_snapshot_fields():
    legacy_a = StudentSnapshot(student_id=None, nis="009", nama="Dewi", kelas="XI-1")
    legacy_b = StudentSnapshot(student_id=None, nis="009", nama="Dewi", kelas="XI-1")
    other_class = StudentSnapshot(student_id=None, nis="009", nama="Dewi", kelas="XI-2")

    offenses = tally([make_event(1, legacy_a), make_event(2, legacy_b), make_event(3, other_class)])

    assert len(offenses) == 2
    assert offenses.count_for(legacy_a) == 2
    assert offenses.count_for(other_class) == 1


def test_student_id_wins_over_changed_snapshot_fields():
    before = StudentSnapshot(student_id=7, nis="070", nama="Eka", kelas="X-1")
    after_promotion = StudentSnapshot(student_id=7, nis="070", nama="Eka", kelas="XI-1")

    offenses = tally([make_event(1, before, on=date(2025, 5, 1)), make_event(2, after_promotion)])

    assert len(offenses) == 1
    assert identity_of(before) == identity_of(after_promotion)
    # First appearance decides the displayed fields.
    assert offenses.entries()[0].kelas == "X-1"
    assert offenses.entries()[0].count == 2


def test_empty_event_set():
    offenses = tally([])
    assert len(offenses) == 0
    assert classify(offenses, 1) == []
