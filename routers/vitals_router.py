from fastapi import APIRouter

from database import get_latest_vital

router = APIRouter(prefix="/vitals", tags=["Vitals"])


@router.get("/latest/{bed_id}")
def latest_vital(bed_id: str):
    """Latest reading for a bed as a bare object, {} when the bed has none"""
    vital = get_latest_vital(bed_id)
    if not vital:
        return {}
    return vital.model_dump(mode="json", by_alias=True)
