from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    ADMIN = "ADMIN"
    DOCTOR = "DOCTOR"
    NURSE = "NURSE"


class PatientStatus(str, Enum):
    STABLE = "Stable"
    CRITICAL = "Critical"
    DISCHARGED = "Discharged"


class WireModel(BaseModel):
    """Base for everything crossing the API: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Accounts

class LoginRequest(WireModel):
    email: str
    password: str


class UserCreate(WireModel):
    name: Optional[str] = None
    email: str
    password: str
    role: Role = Role.NURSE
    specialty: Optional[str] = None


class User(WireModel):
    id: str
    name: Optional[str] = None
    email: str
    role: Role
    specialty: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool = True
    user: User


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "User created"
    user: User


class UserListResponse(BaseModel):
    success: bool = True
    data: List[User]


# Beds

class Bed(WireModel):
    bed_id: str
    room_number: str
    bed_number: int
    is_occupied: bool = False
    current_patient_id: Optional[str] = None


class BedListResponse(BaseModel):
    success: bool = True
    data: List[Bed]


class DischargeRequest(WireModel):
    bed_id: Optional[str] = None


# Vitals

class Vital(WireModel):
    id: str
    bed_id: str
    heart_rate: Optional[float] = None
    spo2: Optional[float] = None
    temperature: Optional[float] = None
    respiration: Optional[float] = None
    timestamp: datetime


# Patients

class PatientCreate(WireModel):
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    diagnosis: Optional[str] = None
    status: PatientStatus = PatientStatus.STABLE
    admission_date: Optional[datetime] = None
    assigned_doctor_id: Optional[str] = None
    # Bed to occupy; stored on the patient as assigned_bed_id
    bed_id: Optional[str] = None


class Patient(WireModel):
    id: str
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    diagnosis: Optional[str] = None
    status: PatientStatus = PatientStatus.STABLE
    admission_date: datetime
    assigned_bed_id: Optional[str] = None
    assigned_doctor_id: Optional[str] = None


class PatientDetail(Patient):
    # Latest reading for the assigned bed, or {} when there is none
    vitals: Union[Vital, Dict[str, Any]] = {}


class PatientResponse(BaseModel):
    success: bool = True
    data: PatientDetail


class CreatedPatientResponse(BaseModel):
    success: bool = True
    data: Patient


class PatientListResponse(BaseModel):
    success: bool = True
    data: List[Patient]
