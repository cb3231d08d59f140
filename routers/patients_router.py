import logging
import sqlite3

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from database import admit_patient, get_latest_vital, get_patient, list_patients
from models import (
    CreatedPatientResponse,
    PatientCreate,
    PatientDetail,
    PatientListResponse,
    PatientResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.get("", response_model=PatientListResponse)
def get_patients():
    return PatientListResponse(data=list_patients())


@router.post("", response_model=CreatedPatientResponse)
def create_patient(payload: dict = Body(...)):
    """Admit a patient, occupying the bed given as bedId.

    The patient insert and the bed update commit together or not at all.
    """
    try:
        patient = admit_patient(PatientCreate.model_validate(payload))
    except (ValidationError, sqlite3.Error) as exc:
        logger.exception("Patient admission failed")
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    return CreatedPatientResponse(data=patient)


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient_detail(patient_id: str):
    """Patient record merged with the latest vitals of its bed"""
    patient = get_patient(patient_id)
    if not patient:
        return JSONResponse(status_code=404, content={"success": False})

    vital = get_latest_vital(patient.assigned_bed_id) if patient.assigned_bed_id else None
    detail = PatientDetail(**patient.model_dump(), vitals=vital or {})
    return PatientResponse(data=detail)
