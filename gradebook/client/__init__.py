from .students_table import StudentsTable, parse_int

__all__ = ["StudentsTable", "parse_int"]
