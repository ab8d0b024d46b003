"""Tests for table validation, rendering and serialization."""

import io

import pytest

from minidb.errors import ColumnCountMismatch, InvalidTypeValue, NullViolation, UniqueViolation
from minidb.schema import Constraint
from minidb.table import NO_RECORDS, Table


@pytest.fixture
def people():
    """A table with an integer primary key and a free-text column."""
    table = Table("people")
    table.add_column("id", "int", Constraint.PRIMARY_KEY)
    table.add_column("name", "text")
    return table


class TestInsertRow:
    """Tests for arity and type checks."""

    def test_insert_appends_record(self, people):
        record = people.insert_row(["1", "alice"])
        assert record.fields == ("1", "alice")
        assert people.row_count == 1
        assert len(people) == 1

    @pytest.mark.parametrize("values", [[], ["1"], ["1", "alice", "extra"]])
    def test_column_count_mismatch(self, people, values):
        """Wrong arity is rejected and leaves the table unchanged."""
        with pytest.raises(ColumnCountMismatch) as exc_info:
            people.insert_row(values)
        assert exc_info.value.expected == 2
        assert exc_info.value.got == len(values)
        assert str(exc_info.value) == f"Column count mismatch. Expected 2, got {len(values)}"
        assert people.row_count == 0

    @pytest.mark.parametrize("value", ["abc", "1.5", " 2", "+3", "0x10"])
    def test_invalid_integer(self, value):
        table = Table("t")
        table.add_column("n", "int")
        with pytest.raises(InvalidTypeValue) as exc_info:
            table.insert_row([value])
        assert exc_info.value.column == "n"
        assert "column n" in str(exc_info.value)
        assert table.row_count == 0

    @pytest.mark.parametrize("value", ["42", "-7", "--1", "-", "", "1-2"])
    def test_loose_integer_check(self, value):
        """Any mix of digits and '-' passes, including the empty string."""
        table = Table("t")
        table.add_column("n", "int")
        table.insert_row([value])
        assert table.row_count == 1

    def test_other_types_not_checked(self):
        table = Table("t")
        table.add_column("v", "float")
        table.insert_row(["not a number"])
        assert table.records[0].fields == ("not a number",)


class TestConstraints:
    """Tests for NOT NULL, UNIQUE and PRIMARY KEY enforcement."""

    def test_not_null_rejects_empty(self):
        table = Table("t")
        table.add_column("a", "text")
        table.add_column("b", "text", Constraint.NOT_NULL)
        with pytest.raises(NullViolation) as exc_info:
            table.insert_row(["x", ""])
        assert exc_info.value.column == "b"
        assert exc_info.value.constraint == "NOT NULL"
        assert table.row_count == 0

    def test_unique_accepts_first_and_rejects_duplicate(self):
        table = Table("t")
        table.add_column("email", "text", Constraint.UNIQUE)
        table.insert_row(["a@example.com"])
        table.insert_row(["b@example.com"])
        with pytest.raises(UniqueViolation) as exc_info:
            table.insert_row(["a@example.com"])
        assert exc_info.value.constraint == "UNIQUE"
        assert str(exc_info.value) == "Duplicate value in UNIQUE column email"
        assert table.row_count == 2

    def test_unique_allows_repeated_empty_only_once(self):
        """Empty strings are ordinary values for UNIQUE."""
        table = Table("t")
        table.add_column("v", "text", Constraint.UNIQUE)
        table.insert_row([""])
        with pytest.raises(UniqueViolation):
            table.insert_row([""])

    def test_primary_key_rejects_empty(self, people):
        with pytest.raises(NullViolation) as exc_info:
            people.insert_row(["", "alice"])
        assert exc_info.value.constraint == "PRIMARY KEY"
        assert str(exc_info.value) == "Primary key column id cannot be NULL"

    def test_primary_key_rejects_duplicate(self, people):
        people.insert_row(["1", "alice"])
        with pytest.raises(UniqueViolation) as exc_info:
            people.insert_row(["1", "bob"])
        assert exc_info.value.constraint == "PRIMARY KEY"
        assert str(exc_info.value) == "Duplicate primary key value in column id"
        assert people.row_count == 1

    def test_comparison_is_textual(self, people):
        """Values are compared as text, so '01' and '1' are distinct keys."""
        people.insert_row(["1", "alice"])
        people.insert_row(["01", "bob"])
        assert people.row_count == 2

    def test_unique_pass_runs_before_primary_key_pass(self):
        """A column with PRIMARY and UNIQUE reports the UNIQUE violation."""
        table = Table("t")
        table.add_column("id", "int", Constraint.PRIMARY_KEY | Constraint.UNIQUE)
        table.insert_row(["1"])
        with pytest.raises(UniqueViolation) as exc_info:
            table.insert_row(["1"])
        assert exc_info.value.constraint == "UNIQUE"

    def test_not_null_pass_runs_before_primary_key_pass(self):
        table = Table("t")
        table.add_column("id", "int", Constraint.PRIMARY_KEY | Constraint.NOT_NULL)
        with pytest.raises(NullViolation) as exc_info:
            table.insert_row([""])
        assert exc_info.value.constraint == "NOT NULL"

    def test_not_null_pass_covers_all_columns_first(self):
        """A NOT NULL failure in a later column wins over an earlier UNIQUE one."""
        table = Table("t")
        table.add_column("a", "text", Constraint.UNIQUE)
        table.add_column("b", "text", Constraint.NOT_NULL)
        table.insert_row(["x", "y"])
        with pytest.raises(NullViolation) as exc_info:
            table.insert_row(["x", ""])
        assert exc_info.value.column == "b"

    def test_first_violating_column_is_reported(self):
        table = Table("t")
        table.add_column("a", "text", Constraint.UNIQUE)
        table.add_column("b", "text", Constraint.UNIQUE)
        table.insert_row(["x", "y"])
        with pytest.raises(UniqueViolation) as exc_info:
            table.insert_row(["x", "y"])
        assert exc_info.value.column == "a"

    def test_type_check_runs_before_constraints(self, people):
        with pytest.raises(InvalidTypeValue):
            people.insert_row(["abc", ""])

    def test_column_added_after_rows_is_not_revalidated(self, people):
        people.insert_row(["1", "alice"])
        people.add_column("age", "int", Constraint.NOT_NULL)
        assert people.row_count == 1
        assert len(people.records[0]) == 2


class TestSelectAll:
    """Tests for the table view."""

    def test_empty_table(self, people):
        assert list(people.select_all()) == [NO_RECORDS]

    def test_rendering(self, people):
        people.insert_row(["1", "alice"])
        people.insert_row(["2", "bob"])
        lines = list(people.select_all())
        assert lines == [
            "id" + " " * 13 + "name" + " " * 11,
            "-" * 30,
            "1" + " " * 14 + "alice" + " " * 10,
            "2" + " " * 14 + "bob" + " " * 12,
        ]

    def test_long_values_are_not_truncated(self):
        table = Table("t")
        table.add_column("v", "text")
        table.insert_row(["x" * 20])
        assert list(table.select_all())[2] == "x" * 20

    def test_view_is_restartable(self, people):
        people.insert_row(["1", "alice"])
        view = people.select_all()
        assert list(view) == list(view)

    def test_view_is_lazy(self, people):
        """A view reflects rows inserted after it was created."""
        view = people.select_all()
        people.insert_row(["1", "alice"])
        assert len(list(view)) == 3

    def test_str(self, people):
        people.insert_row(["1", "alice"])
        assert str(people.select_all()).count("\n") == 2


class TestSerialization:
    """Tests for saving and loading a table block."""

    def test_save(self, people):
        people.insert_row(["1", "alice"])
        people.insert_row(["2", "bob"])
        sink = io.StringIO()
        people.save(sink)
        assert sink.getvalue() == (
            "TABLE people\n"
            "id int 1\n"
            "name text 0\n"
            "DATA\n"
            "1 alice\n"
            "2 bob\n"
            "END\n"
        )

    def test_save_empty_table(self):
        sink = io.StringIO()
        Table("empty").save(sink)
        assert sink.getvalue() == "TABLE empty\nDATA\nEND\n"

    def test_load(self):
        lines = [
            "id int 1\n",
            "\n",
            "email text 6\n",
            "DATA\n",
            "1 a@example.com\n",
            "\n",
            "2 b@example.com\n",
            "END\n",
        ]
        table = Table("users")
        skipped = table.load(lines)
        assert skipped == 0
        assert [(c.name, c.type, int(c.constraints)) for c in table.columns] == [
            ("id", "int", 1),
            ("email", "text", 6),
        ]
        assert [r.fields for r in table.records] == [("1", "a@example.com"), ("2", "b@example.com")]

    def test_load_skips_invalid_rows(self):
        """Rows that fail validation are dropped and loading continues."""
        lines = iter([
            "id int 1\n",
            "DATA\n",
            "1\n",
            "1\n",
            "x\n",
            "1 2\n",
            "2\n",
            "END\n",
        ])
        table = Table("t")
        assert table.load(lines) == 3
        assert [r.fields for r in table.records] == [("1",), ("2",)]

    def test_load_stops_at_end_marker(self):
        lines = iter(["v text 0\n", "DATA\n", "a\n", "END\n", "TABLE next\n"])
        table = Table("t")
        table.load(lines)
        assert next(lines) == "TABLE next\n"

    def test_load_missing_constraint_bits(self):
        table = Table("t")
        table.load(["v text\n", "w\n", "DATA\n", "END\n"])
        assert [(c.name, c.type, int(c.constraints)) for c in table.columns] == [
            ("v", "text", 0),
            ("w", "", 0),
        ]

    def test_load_constraint_bits_leading_digits(self):
        """Trailing junk after the bits is ignored; no leading digit reads as 0."""
        table = Table("t")
        table.load(["a int 3abc\n", "b text x5\n", "DATA\n", "END\n"])
        assert [int(c.constraints) for c in table.columns] == [3, 0]
