from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Order matters: it is the column order of the table UI.
SUBJECTS = ("Java", "CPP", "Python", "GenAI", "FSD")

# Stored as BSON int64
Score = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class Scores(BaseModel):
    model_config = ConfigDict(extra="forbid")

    Java: Score = 0
    CPP: Score = 0
    Python: Score = 0
    GenAI: Score = 0
    FSD: Score = 0


class StudentCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    rollNo: str = Field(..., min_length=1)
    scores: Scores = Field(default_factory=Scores)


class StudentUpdate(BaseModel):
    """
    Top-level partial update. Only fields present in the request body are
    applied; a present `scores` map replaces the stored one as a whole.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    rollNo: Optional[str] = Field(None, min_length=1)
    scores: Optional[Scores] = None

    @field_validator("name", "rollNo", "scores", mode="before")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v

    def to_set_document(self) -> dict:
        # exclude_unset would also drop the unset subjects inside `scores`
        doc = {}
        for field in self.model_fields_set:
            value = getattr(self, field)
            doc[field] = value.model_dump() if isinstance(value, BaseModel) else value
        return doc


class StudentOut(BaseModel):
    name: str
    rollNo: str
    scores: Scores


class StudentGPA(BaseModel):
    name: str
    rollNo: str
    gpa: str
