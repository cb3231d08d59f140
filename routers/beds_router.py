import logging

from fastapi import APIRouter

from database import discharge_bed, list_beds
from models import BedListResponse, DischargeRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/beds", tags=["Beds"])


@router.get("", response_model=BedListResponse)
def get_beds():
    """All beds, sorted by room and bed number"""
    return BedListResponse(data=list_beds())


@router.post("/discharge")
def discharge(request: DischargeRequest):
    """Free a bed and mark its patient discharged.

    Succeeds even when the bed is unknown, already empty or not given.
    """
    if not request.bed_id:
        logger.info("Discharge requested without a bed id")
        return {"success": True, "message": "Patient discharged"}

    patient_id = discharge_bed(request.bed_id)
    if patient_id:
        logger.info("Discharged patient %s from bed %s", patient_id, request.bed_id)
    else:
        logger.info("Bed %s freed with no current patient", request.bed_id)

    return {"success": True, "message": "Patient discharged"}
