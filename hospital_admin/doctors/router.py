"""
Doctor Router - API endpoints for doctor record management.

Any authenticated staff member may read doctor records; only admins may
create, change or delete them.
"""
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..auth.dependencies import require_admin, require_user_or_admin
from ..core.schemas import MessageResponse
from ..database import get_db
from ..exceptions import AppException, InternalServerError
from .models import DoctorStatus
from .schemas import DoctorCreate, DoctorUpdate, DoctorResponse
from .service import list_doctors, get_doctor, create_doctor, update_doctor, delete_doctor

logger = logging.getLogger(__name__)

router = APIRouter()


def _unexpected(action: str, e: Exception) -> InternalServerError:
    logger.error(f"Unexpected error {action}: {str(e)}")
    return InternalServerError(reason="unexpected", detail=str(e))


@router.get("", response_model=List[DoctorResponse], dependencies=[Depends(require_user_or_admin)])
def list_doctors_route(
    department: Optional[str] = Query(None, description="Filter by department"),
    title: Optional[str] = Query(None, description="Filter by title"),
    status: Optional[DoctorStatus] = Query(None, description="Filter by employment status"),
    db: Session = Depends(get_db),
):
    """
    Get doctors, newest first, optionally filtered by department, title and status.
    """
    try:
        return list_doctors(db, department=department, title=title, status=status)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected("listing doctors", e)


@router.get("/{doctor_id}", response_model=DoctorResponse, dependencies=[Depends(require_user_or_admin)])
def get_doctor_route(doctor_id: int, db: Session = Depends(get_db)):
    try:
        return get_doctor(db, doctor_id)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected(f"loading doctor {doctor_id}", e)


@router.post(
    "",
    response_model=DoctorResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_doctor_route(doctor_data: DoctorCreate, db: Session = Depends(get_db)):
    try:
        return create_doctor(db, doctor_data)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected("creating doctor", e)


@router.put("/{doctor_id}", response_model=DoctorResponse, dependencies=[Depends(require_admin)])
def update_doctor_route(doctor_id: int, doctor_data: DoctorUpdate, db: Session = Depends(get_db)):
    """
    Partially update a doctor. Only the supplied fields change.
    """
    try:
        return update_doctor(db, doctor_id, doctor_data)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected(f"updating doctor {doctor_id}", e)


@router.delete("/{doctor_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def delete_doctor_route(doctor_id: int, db: Session = Depends(get_db)):
    try:
        delete_doctor(db, doctor_id)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected(f"deleting doctor {doctor_id}", e)
    return {"message": "Doctor deleted"}
