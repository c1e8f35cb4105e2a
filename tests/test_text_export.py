from decimal import Decimal

import pytest

from conftest import make_item
from domain.models import StudentRecord, grade_for_score
from services.text_export import format_inventory_item, format_student, write_report
from shared.exceptions import StorageIOError


@pytest.mark.parametrize(
    "score,grade",
    [("100", "A"), ("80", "A"), ("79.9", "B"), ("70", "B"), ("60", "C"), ("50", "D"), ("49.99", "F"), ("0", "F")],
)
def test_grade_thresholds(score, grade):
    assert grade_for_score(Decimal(score)) == grade


def test_format_student():
    assert format_student(StudentRecord("S001", "John Doe", Decimal("85"))) == (
        "ID: S001, Name: John Doe, Score: 85, Grade: A"
    )
    assert format_student(StudentRecord("S002", "Jane Roe", Decimal("72.50"))) == (
        "ID: S002, Name: Jane Roe, Score: 72.5, Grade: B"
    )


def test_format_inventory_item():
    assert format_inventory_item(make_item(1, 50, name="Rice Bag")) == (
        "ID: 1, Name: Rice Bag, Quantity: 50, Added: 2024-01-02 10:00:00"
    )


def test_write_report_replaces_file(tmp_path, students):
    path = tmp_path / "report.txt"
    path.write_text("old content\n", encoding="utf-8")

    assert write_report(path, "Student Grades", students, format_student) == 3

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "=== Student Grades ==="
    assert lines[1] == "ID: S001, Name: John Doe, Score: 85, Grade: A"
    assert len(lines) == 4


def test_write_report_with_no_entities(tmp_path):
    path = tmp_path / "report.txt"
    assert write_report(path, "Empty", [], format_student) == 0
    assert path.read_text(encoding="utf-8") == "=== Empty ===\n"


def test_write_report_failure_is_io_error(tmp_path, students):
    with pytest.raises(StorageIOError):
        write_report(tmp_path / "missing" / "report.txt", "Grades", students, format_student)


def test_write_report_encoding_failure_is_io_error(tmp_path):
    path = tmp_path / "report.txt"
    with pytest.raises(StorageIOError) as exc:
        write_report(path, "Stock", [make_item(1, 50, name="Crème €")], format_inventory_item, encoding="ascii")

    assert exc.value.operation == "encode"
    assert not path.exists()
