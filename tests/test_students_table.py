import httpx
import pytest

from gradebook.client import StudentsTable, parse_int
from gradebook.client.students_table import UPDATE_FAILED


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def table(client, alerts):
    client.post("/", json={"name": "Amy", "rollNo": "R1", "scores": {"Java": 40}})
    client.post("/", json={"name": "Ben", "rollNo": "R2"})
    t = StudentsTable(client, alert=alerts.append)
    t.mount()
    return t


@pytest.mark.parametrize(
    "text,expected",
    [("42", 42), ("  7", 7), ("-3", -3), ("12abc", 12), ("", None), ("abc", None), ("4.9", 4)],
)
def test_parse_int(text, expected):
    assert parse_int(text) == expected


def test_mount_loads_rows(table):
    assert not table.editing
    assert table.render() == [
        ["Amy", "R1", "40", "0", "0", "0", "0", "Update"],
        ["Ben", "R2", "0", "0", "0", "0", "0", "Update"],
    ]


def test_edit_and_submit(table, client, alerts):
    table.click_update("R1")
    assert table.editing and table.edit_row == "R1"
    table.change_score("Java", "95")
    table.change_score("FSD", "70")
    assert table.render()[0] == ["Amy", "R1", "95", "0", "0", "0", "70", "Submit"]

    assert table.submit() is True
    assert alerts == ["Student updated successfully"]
    assert not table.editing
    assert table.render()[0] == ["Amy", "R1", "95", "0", "0", "0", "70", "Update"]
    assert client.get("/student/R1").json()["scores"]["FSD"] == 70


def test_edit_buffer_is_a_copy(table):
    table.click_update("R1")
    table.change_score("Java", "1")
    assert table.students[0]["scores"]["Java"] == 40


def test_failed_submit_stays_editing(table, client, alerts):
    table.click_update("R2")
    table.change_score("CPP", "88")
    table.change_score("Java", "not a number")

    assert table.submit() is False
    assert alerts == [UPDATE_FAILED]
    assert table.edit_row == "R2"
    assert table.updated_scores["CPP"] == 88
    assert table.updated_scores["Java"] is None
    assert client.get("/student/R2").json()["scores"]["CPP"] == 0


def test_submit_for_deleted_student_fails(table, client, alerts):
    table.click_update("R1")
    client.delete("/student/R1")
    assert table.submit() is False
    assert alerts == [UPDATE_FAILED]
    assert table.editing


def test_switching_rows_discards_edits(table):
    table.click_update("R1")
    table.change_score("Java", "99")
    table.click_update("R2")
    assert table.edit_row == "R2"
    assert table.updated_scores["Java"] == 0


def test_guards(table):
    with pytest.raises(LookupError):
        table.click_update("R404")
    with pytest.raises(RuntimeError):
        table.submit()
    table.click_update("R1")
    with pytest.raises(ValueError):
        table.change_score("Rust", "10")


def test_fetch_failure_keeps_last_rows(table):
    loaded = list(table.students)
    table.http = httpx.Client(
        base_url="http://testserver",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )
    table.fetch_students()
    assert table.students == loaded


def test_fetch_failure_on_mount_leaves_table_empty():
    http = httpx.Client(
        base_url="http://testserver",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    t = StudentsTable(http)
    t.mount()
    assert t.students == []
    assert t.render() == []
