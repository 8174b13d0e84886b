import os
import sys

from gradebook.core import database
from gradebook.core.config import CONFIG
from gradebook.services.student_ingest import import_students_csv


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    csv_path = argv[0] if argv else "students.csv"
    if not os.path.exists(csv_path):
        print(f"Error: {csv_path} not found.")
        return 1

    print(f"Reading {csv_path}...")
    with open(csv_path, "rb") as f:
        file_content = f.read()

    client = database.connect(CONFIG)
    try:
        students = database.students_collection(client, CONFIG)
        database.ensure_indexes(students, CONFIG)
        print("Upserting students into MongoDB...")
        result = import_students_csv(students, file_content)
    except UnicodeDecodeError as e:
        print(f"Error: {csv_path} is not valid UTF-8 ({e}).")
        return 1
    finally:
        client.close()

    print(f"Result: {result}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
