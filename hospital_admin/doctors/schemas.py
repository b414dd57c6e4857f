"""
Doctor Schemas - Pydantic models for doctor data validation and serialization.

Request bodies are validated here, at the boundary: missing required fields
and values outside the gender/status enumerations never reach the store.
"""
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from pydantic import Field, field_validator

from ..core.schemas import CamelModel
from .models import Gender, DoctorStatus

# Columns holding nested documents, stored as JSON
DOCUMENT_FIELDS = ("education", "work_experience", "certificates", "contact")


class Education(CamelModel):
    degree: Optional[str] = None
    school: Optional[str] = None
    major: Optional[str] = None
    graduation_year: Optional[int] = None


class WorkExperience(CamelModel):
    hospital: Optional[str] = None
    position: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None


class Certificate(CamelModel):
    name: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    issuing_authority: Optional[str] = None


class Contact(CamelModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class DoctorPayload(CamelModel):
    """Common conversion of a request body into column values."""

    def to_record(self, exclude_unset: bool = False) -> Dict[str, Any]:
        """
        Return column values for the supplied fields.

        Enumerations stay as enum members for the ORM; nested documents are
        converted to plain JSON (dates become ISO strings).
        """
        data = self.model_dump(exclude_unset=exclude_unset)
        documents = set(DOCUMENT_FIELDS) & set(data)
        if documents:
            data.update(self.model_dump(mode="json", include=documents, exclude_unset=exclude_unset))
        return data


def strip_required_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be blank")
    return v


class DoctorCreate(DoctorPayload):
    """
    Doctor Creation Schema

    Fields:
    - name, gender, age, department, title: Required
    - specialty, education, work_experience, certificates: Optional lists
    - contact: Optional contact block
    - status: Defaults to ``active``
    """
    name: str = Field(..., min_length=1)
    gender: Gender
    age: int = Field(..., ge=0)
    department: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    specialty: List[str] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    work_experience: List[WorkExperience] = Field(default_factory=list)
    certificates: List[Certificate] = Field(default_factory=list)
    contact: Optional[Contact] = None
    status: DoctorStatus = DoctorStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required_name(v)


class DoctorUpdate(DoctorPayload):
    """
    Doctor Update Schema - Partial update, only supplied fields change.

    Required fields may be omitted but not cleared; ``contact`` may be set
    to null to remove it.
    """
    name: Optional[str] = Field(None, min_length=1)
    gender: Optional[Gender] = None
    age: Optional[int] = Field(None, ge=0)
    department: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = Field(None, min_length=1)
    specialty: Optional[List[str]] = None
    education: Optional[List[Education]] = None
    work_experience: Optional[List[WorkExperience]] = None
    certificates: Optional[List[Certificate]] = None
    contact: Optional[Contact] = None
    status: Optional[DoctorStatus] = None

    @field_validator(
        "name", "gender", "age", "department", "title", "specialty",
        "education", "work_experience", "certificates", "status",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required_name(v)


class DoctorResponse(CamelModel):
    """
    Doctor Response Schema - Used when returning doctor data
    """
    id: int
    name: str
    gender: Gender
    age: int
    department: str
    title: str
    specialty: List[str] = []
    education: List[Education] = []
    work_experience: List[WorkExperience] = []
    certificates: List[Certificate] = []
    contact: Optional[Contact] = None
    status: DoctorStatus
    created_at: datetime
    updated_at: datetime
