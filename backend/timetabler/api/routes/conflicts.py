from fastapi import APIRouter

from timetabler.schemas.conflict import ConflictReport, DetectConflictsRequest
from timetabler.services.conflict_service import ConflictService

router = APIRouter()


@router.post("/detect", response_model=ConflictReport)
def detect_conflicts(payload: DetectConflictsRequest) -> ConflictReport:
    service = ConflictService([gene.to_domain() for gene in payload.genes])
    return service.build_report()
