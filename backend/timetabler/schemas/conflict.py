from pydantic import BaseModel, Field
from typing import Literal, List, Dict

from timetabler.schemas.timetable import GenePayload


class ConflictDetail(BaseModel):
    id: str
    conflict_type: Literal["instructor_conflict", "room_conflict", "section_conflict"]
    description: str
    severity: Literal["hard", "soft"] = "hard"
    time_slot_id: str
    affected_genes: List[int]  # Indices into the submitted gene list
    course_ids: List[str]


class ConflictReport(BaseModel):
    conflicts: List[ConflictDetail]
    total: int
    counts: Dict[str, int] = Field(default_factory=dict)


class DetectConflictsRequest(BaseModel):
    genes: List[GenePayload] = Field(default_factory=list)
