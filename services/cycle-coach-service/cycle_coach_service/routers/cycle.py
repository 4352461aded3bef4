from fastapi import APIRouter

from ..prompts import recent_patterns
from ..schemas.cycle import CyclePhase, CycleStatus, PhaseInfo
from ..schemas.generation import CycleStatusRequest, PatternsRequest, RecentPatterns
from ..services.cycle_calculator import cycle_status

router = APIRouter()


@router.post("/status", response_model=CycleStatus)
async def get_cycle_status(body: CycleStatusRequest) -> CycleStatus:
    return cycle_status(body.profile, body.today)


@router.get("/phases", response_model=list[PhaseInfo])
async def list_phases() -> list[PhaseInfo]:
    return [PhaseInfo.from_phase(phase) for phase in CyclePhase]


@router.post("/patterns", response_model=RecentPatterns)
async def get_recent_patterns(body: PatternsRequest) -> RecentPatterns:
    return recent_patterns(body.journal_entries)
