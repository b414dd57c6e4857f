"""
Doctor Service - Business logic for doctor record management.

Each function performs a single store operation on the doctors table.
"""
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from ..exceptions import NotFound, InternalServerError
from .models import Doctor, DoctorStatus
from .schemas import DoctorCreate, DoctorUpdate

# Set up logging
logger = logging.getLogger(__name__)


def _store_error(action: str, e: Exception) -> InternalServerError:
    logger.error(f"Error {action}: {str(e)}")
    return InternalServerError(reason="store_error", detail=f"{action}: {str(e)}")


def list_doctors(
    db: Session,
    department: Optional[str] = None,
    title: Optional[str] = None,
    status: Optional[DoctorStatus] = None,
) -> List[Doctor]:
    """
    Get doctors matching the given equality filters, newest first.

    Args:
        db: Database session
        department: Exact department to match
        title: Exact title to match
        status: Employment status to match

    Returns:
        List[Doctor]: Matching doctors
    """
    query = db.query(Doctor)

    if department:
        query = query.filter(Doctor.department == department)
    if title:
        query = query.filter(Doctor.title == title)
    if status:
        query = query.filter(Doctor.status == status)

    try:
        return query.order_by(Doctor.created_at.desc(), Doctor.id.desc()).all()
    except SQLAlchemyError as e:
        raise _store_error("listing doctors", e)


def get_doctor(db: Session, doctor_id: int) -> Doctor:
    """
    Get a doctor by ID.

    Raises:
        NotFound: If the doctor does not exist
    """
    try:
        doctor = db.query(Doctor).filter(Doctor.id == doctor_id).first()
    except SQLAlchemyError as e:
        raise _store_error(f"loading doctor {doctor_id}", e)
    if not doctor:
        raise NotFound("Doctor not found", reason="missing_doctor", detail=f"doctor_id={doctor_id}")
    return doctor


def create_doctor(db: Session, doctor_data: DoctorCreate) -> Doctor:
    """
    Create a doctor record from a validated payload.
    """
    doctor = Doctor(**doctor_data.to_record())
    db.add(doctor)
    try:
        db.commit()
        db.refresh(doctor)
    except SQLAlchemyError as e:
        db.rollback()
        raise _store_error("creating doctor", e)

    logger.info(f"Doctor {doctor.id} created ({doctor.name}, {doctor.department})")
    return doctor


def update_doctor(db: Session, doctor_id: int, doctor_data: DoctorUpdate) -> Doctor:
    """
    Merge the supplied fields onto an existing doctor and refresh ``updated_at``.

    Raises:
        NotFound: If the doctor does not exist
    """
    doctor = get_doctor(db, doctor_id)

    update_data = doctor_data.to_record(exclude_unset=True)
    for field, value in update_data.items():
        setattr(doctor, field, value)
    doctor.touch()

    try:
        db.commit()
        db.refresh(doctor)
    except SQLAlchemyError as e:
        db.rollback()
        raise _store_error(f"updating doctor {doctor_id}", e)

    logger.info(f"Doctor {doctor_id} updated (fields: {sorted(update_data)})")
    return doctor


def delete_doctor(db: Session, doctor_id: int) -> None:
    """
    Permanently delete a doctor.

    Raises:
        NotFound: If the doctor does not exist
    """
    doctor = get_doctor(db, doctor_id)
    try:
        db.delete(doctor)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise _store_error(f"deleting doctor {doctor_id}", e)

    logger.info(f"Doctor {doctor_id} deleted")
