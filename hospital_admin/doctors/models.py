"""
Doctor Model - Stores doctor records managed by hospital staff.

Doctors are independent records, not user profiles. Nested collections
(education, work experience, certificates) and the contact block are kept
as JSON documents on the row.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, Enum
from datetime import datetime, timezone
import enum

from ..database import Base
from ..auth.models import utcnow


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class DoctorStatus(str, enum.Enum):
    """
    Employment status of a doctor.

    - ACTIVE: Currently employed
    - LEFT: No longer with the hospital
    - ON_LEAVE: Temporarily away
    """
    ACTIVE = "active"
    LEFT = "left"
    ON_LEAVE = "on-leave"


class Doctor(Base):
    """
    Doctor Model - Stores doctor information

    Fields:
    - id: Primary key
    - name, gender, age, department, title: Required identity fields
    - specialty: Ordered list of specialties
    - education: List of {degree, school, major, graduation_year}
    - work_experience: List of {hospital, position, start_date, end_date, description}
    - certificates: List of {name, issue_date, expiry_date, issuing_authority}
    - contact: {phone, email, address}
    - status: Employment status
    - created_at: When the record was created
    - updated_at: When the record was last changed
    """
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    gender = Column(Enum(Gender), nullable=False)
    age = Column(Integer, nullable=False)
    department = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False, index=True)
    specialty = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    work_experience = Column(JSON, nullable=False, default=list)
    certificates = Column(JSON, nullable=False, default=list)
    contact = Column(JSON, nullable=True)
    status = Column(Enum(DoctorStatus), nullable=False, default=DoctorStatus.ACTIVE, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        """String representation of the Doctor model"""
        return f"<Doctor(id={self.id}, name='{self.name}', department='{self.department}')>"

    def touch(self) -> None:
        """Refresh ``updated_at``; called on every mutation."""
        self.updated_at = datetime.now(timezone.utc)
