import mongomock

from gradebook.services.student_ingest import import_students_csv

CSV = b"""name,rollNo,Java,CPP,Python,GenAI,FSD
Amy,R1,80,90,70,100,60
Ben,R2,,50,,,
,R3,1,1,1,1,1
Cat,R4,ten,1,1,1,1
Amy Pond,R1,81,90,70,100,60
"""


def test_import_students_csv_upserts_and_skips():
    students = mongomock.MongoClient()["studentDB"]["students"]

    result = import_students_csv(students, CSV)

    assert result == {"status": "success", "records_processed": 3, "skipped": 2}
    assert students.count_documents({}) == 2

    amy = students.find_one({"rollNo": "R1"})
    assert amy["name"] == "Amy Pond"
    assert amy["scores"]["Java"] == 81

    ben = students.find_one({"rollNo": "R2"})
    assert ben["scores"] == {"Java": 0, "CPP": 50, "Python": 0, "GenAI": 0, "FSD": 0}


def test_import_handles_utf8_bom():
    students = mongomock.MongoClient()["studentDB"]["students"]
    result = import_students_csv(students, b"\xef\xbb\xbfname,rollNo\nAmy,R1\n")
    assert result["records_processed"] == 1
    assert students.find_one({"rollNo": "R1"})["name"] == "Amy"
