import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional

from config import BED_ROOMS, BEDS_PER_ROOM, settings
from models import (
    Bed,
    Patient,
    PatientCreate,
    PatientStatus,
    Role,
    User,
    UserCreate,
    Vital,
)

logger = logging.getLogger(__name__)


def init_database():
    """Create the ward tables, then seed beds and check for an administrator"""
    with get_db() as conn:
        conn.executescript('''
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                name TEXT,
                email TEXT UNIQUE NOT NULL,
                password TEXT NOT NULL,
                role TEXT NOT NULL DEFAULT 'NURSE',
                specialty TEXT
            );

            CREATE TABLE IF NOT EXISTS patients (
                id TEXT PRIMARY KEY,
                name TEXT,
                age INTEGER,
                gender TEXT,
                diagnosis TEXT,
                status TEXT NOT NULL DEFAULT 'Stable',
                admission_date TEXT NOT NULL,
                assigned_bed_id TEXT,
                assigned_doctor_id TEXT
            );

            CREATE TABLE IF NOT EXISTS beds (
                bed_id TEXT PRIMARY KEY,
                room_number TEXT NOT NULL,
                bed_number INTEGER NOT NULL,
                is_occupied INTEGER NOT NULL DEFAULT 0,
                current_patient_id TEXT
            );

            CREATE TABLE IF NOT EXISTS vitals (
                id TEXT PRIMARY KEY,
                bed_id TEXT NOT NULL,
                heart_rate REAL,
                spo2 REAL,
                temperature REAL,
                respiration REAL,
                timestamp TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_vitals_bed_timestamp
                ON vitals (bed_id, timestamp DESC);
        ''')

    # Both checks are best-effort; a failure must not stop the server
    try:
        seed_beds()
    except sqlite3.Error:
        logger.exception("Bed initialization failed")

    try:
        if not admin_exists():
            logger.warning("No admin user found. Create one via POST /users/register")
    except sqlite3.Error:
        logger.exception("User initialization failed")


def seed_beds() -> int:
    """Insert the fixed bed inventory when the bed table is empty.

    Returns the number of beds created, 0 when beds already exist.
    """
    with get_db() as conn:
        count = conn.execute("SELECT COUNT(*) FROM beds").fetchone()[0]
        if count:
            return 0

        logger.info("Initializing beds...")
        beds = [
            (f"R{room}-B{number}", room, number)
            for room in BED_ROOMS
            for number in range(1, BEDS_PER_ROOM + 1)
        ]
        conn.executemany('''
            INSERT INTO beds (bed_id, room_number, bed_number, is_occupied, current_patient_id)
            VALUES (?, ?, ?, 0, NULL)
        ''', beds)
        conn.commit()

    logger.info("Created %d beds for rooms %s", len(beds), ", ".join(BED_ROOMS))
    return len(beds)


@contextmanager
def get_db():
    """Database connection context manager"""
    conn = sqlite3.connect(settings.DATABASE_PATH)
    conn.row_factory = sqlite3.Row  # Enable dict-like access
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction():
    """Run the enclosed writes atomically; roll everything back on any error.

    BEGIN IMMEDIATE takes the write lock up front, so concurrent
    transactions are serialized rather than interleaved.
    """
    conn = sqlite3.connect(
        settings.DATABASE_PATH, timeout=settings.DATABASE_TIMEOUT, isolation_level=None
    )
    conn.row_factory = sqlite3.Row
    try:
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
            conn.execute("COMMIT")
        except Exception:
            # SQLite may already have rolled back on its own (RAISE(ROLLBACK), disk full)
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
    finally:
        conn.close()


def new_id() -> str:
    return uuid.uuid4().hex


def to_timestamp(value: Optional[datetime] = None) -> str:
    """Fixed-width UTC ISO string, so text ordering matches time ordering"""
    if value is None:
        value = datetime.now(timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


# Accounts

def get_user_by_credentials(email: str, password: str) -> Optional[User]:
    """Get the account whose email and password both match exactly"""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE email = ? AND password = ?", (email, password)
        ).fetchone()
        return User.model_validate(dict(row)) if row else None


def admin_exists() -> bool:
    with get_db() as conn:
        row = conn.execute(
            "SELECT 1 FROM users WHERE role = ? LIMIT 1", (Role.ADMIN.value,)
        ).fetchone()
        return row is not None


def create_user(user: UserCreate) -> User:
    """Create a new account; raises sqlite3.IntegrityError on a duplicate email"""
    user_id = new_id()
    with get_db() as conn:
        conn.execute('''
            INSERT INTO users (id, name, email, password, role, specialty)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', (user_id, user.name, user.email, user.password, user.role.value, user.specialty))
        conn.commit()

    return User(
        id=user_id,
        name=user.name,
        email=user.email,
        role=user.role,
        specialty=user.specialty,
    )


def list_users() -> List[User]:
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM users").fetchall()
        return [User.model_validate(dict(row)) for row in rows]


def delete_user(user_id: str):
    with get_db() as conn:
        conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        conn.commit()


# Beds

def list_beds() -> List[Bed]:
    """All beds by room (text order) then bed number (numeric order)"""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM beds ORDER BY room_number ASC, bed_number ASC"
        ).fetchall()
        return [Bed.model_validate(dict(row)) for row in rows]


def get_bed(bed_id: str) -> Optional[Bed]:
    with get_db() as conn:
        row = conn.execute("SELECT * FROM beds WHERE bed_id = ?", (bed_id,)).fetchone()
        return Bed.model_validate(dict(row)) if row else None


# Patients

def list_patients() -> List[Patient]:
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM patients").fetchall()
        return [Patient.model_validate(dict(row)) for row in rows]


def get_patient(patient_id: str) -> Optional[Patient]:
    with get_db() as conn:
        row = conn.execute("SELECT * FROM patients WHERE id = ?", (patient_id,)).fetchone()
        return Patient.model_validate(dict(row)) if row else None


def admit_patient(patient: PatientCreate) -> Patient:
    """Create a patient and occupy its bed in one transaction.

    The bed is not checked for existence or occupancy: an unknown bed id
    updates nothing and the patient keeps the dangling reference.
    """
    admitted = Patient(
        id=new_id(),
        name=patient.name,
        age=patient.age,
        gender=patient.gender,
        diagnosis=patient.diagnosis,
        status=patient.status,
        admission_date=to_timestamp(patient.admission_date),
        assigned_bed_id=patient.bed_id,
        assigned_doctor_id=patient.assigned_doctor_id,
    )

    with transaction() as conn:
        conn.execute('''
            INSERT INTO patients (id, name, age, gender, diagnosis, status,
                                  admission_date, assigned_bed_id, assigned_doctor_id)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        ''', (
            admitted.id,
            admitted.name,
            admitted.age,
            admitted.gender,
            admitted.diagnosis,
            admitted.status.value,
            to_timestamp(admitted.admission_date),
            admitted.assigned_bed_id,
            admitted.assigned_doctor_id,
        ))

        if patient.bed_id:
            conn.execute(
                "UPDATE beds SET is_occupied = 1, current_patient_id = ? WHERE bed_id = ?",
                (admitted.id, patient.bed_id),
            )

    return admitted


def discharge_bed(bed_id: str) -> Optional[str]:
    """Release the patient in a bed and free the bed.

    The patient update and the bed update are committed separately, not
    as one transaction. Returns the discharged patient's id, if any.
    """
    bed = get_bed(bed_id)
    patient_id = bed.current_patient_id if bed else None

    if patient_id:
        with get_db() as conn:
            conn.execute(
                "UPDATE patients SET status = ?, assigned_bed_id = NULL WHERE id = ?",
                (PatientStatus.DISCHARGED.value, patient_id),
            )
            conn.commit()

    with get_db() as conn:
        conn.execute(
            "UPDATE beds SET is_occupied = 0, current_patient_id = NULL WHERE bed_id = ?",
            (bed_id,),
        )
        conn.commit()

    return patient_id


# Vitals

def get_latest_vital(bed_id: str) -> Optional[Vital]:
    """Most recent reading for a bed"""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM vitals WHERE bed_id = ? ORDER BY timestamp DESC LIMIT 1",
            (bed_id,),
        ).fetchone()
        return Vital.model_validate(dict(row)) if row else None


def record_vital(bed_id: str, heart_rate: Optional[float] = None,
                 spo2: Optional[float] = None, temperature: Optional[float] = None,
                 respiration: Optional[float] = None,
                 timestamp: Optional[datetime] = None) -> Vital:
    """Store a reading for a bed (readings are produced by bedside monitors)"""
    vital = Vital(
        id=new_id(),
        bed_id=bed_id,
        heart_rate=heart_rate,
        spo2=spo2,
        temperature=temperature,
        respiration=respiration,
        timestamp=to_timestamp(timestamp),
    )
    with get_db() as conn:
        conn.execute('''
            INSERT INTO vitals (id, bed_id, heart_rate, spo2, temperature, respiration, timestamp)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        ''', (
            vital.id, vital.bed_id, vital.heart_rate, vital.spo2,
            vital.temperature, vital.respiration, to_timestamp(vital.timestamp),
        ))
        conn.commit()
    return vital
