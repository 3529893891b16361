from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, JSON
from sqlmodel import Field, SQLModel
from typing import Optional, List
from pydantic import field_validator, model_validator

from app.clinical import MedicalTestType, parse_reading


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PatientBase(SQLModel):
    name: str = Field(min_length=1)
    age: int = Field(ge=0)
    gender: str = Field(min_length=1)
    address: Optional[str] = None
    phone_number: Optional[str] = None
    medical_history: List[str] = Field(default_factory=list, sa_column=Column(JSON))


class Patient(PatientBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    critical_condition: bool = Field(default=False, index=True)


class PatientCreate(PatientBase):
    pass


class PatientUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1)
    age: Optional[int] = Field(default=None, ge=0)
    gender: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    phone_number: Optional[str] = None
    medical_history: Optional[List[str]] = None
    critical_condition: Optional[bool] = None

    @field_validator("name", "age", "gender", "medical_history", "critical_condition")
    @classmethod
    def reject_null(cls, value):
        # Required columns may be omitted from an update but never cleared
        if value is None:
            raise ValueError("field may not be null")
        return value


class MedicalTest(SQLModel, table=True):
    __tablename__ = "medical_test"

    id: Optional[int] = Field(default=None, primary_key=True)
    # No foreign key: tests outlive a deleted patient
    patient_id: int = Field(index=True)
    date: datetime = Field(default_factory=utcnow, index=True, sa_type=DateTime(timezone=True))
    type: MedicalTestType
    value: str


class MedicalTestCreate(SQLModel):
    type: MedicalTestType
    value: str

    @model_validator(mode="after")
    def check_value(self):
        parse_reading(self.type, self.value)
        return self


class MedicalTestUpdate(SQLModel):
    type: Optional[MedicalTestType] = None
    value: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("type", "value", "date")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("field may not be null")
        return value


class MedicalTestSummary(SQLModel):
    id: int
    type: MedicalTestType
    value: str
    date: datetime


class PatientHistory(SQLModel):
    patient: Patient
    tests: List[MedicalTest]


class Message(SQLModel):
    message: str
