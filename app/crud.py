import logging
from typing import List, Optional
from sqlmodel import Session, select
from app.clinical import is_critical, parse_reading
from app.models import (
    MedicalTest,
    MedicalTestCreate,
    MedicalTestUpdate,
    Patient,
    PatientCreate,
    PatientUpdate,
)

logger = logging.getLogger(__name__)


# Patients

def create_patient(session: Session, patient_in: PatientCreate) -> Patient:
    patient = Patient.model_validate(patient_in)
    session.add(patient)
    session.commit()
    session.refresh(patient)
    logger.info("Created patient %s", patient.id)
    return patient


def list_patients(session: Session) -> List[Patient]:
    return session.exec(select(Patient)).all()


def list_critical_patients(session: Session) -> List[Patient]:
    return session.exec(select(Patient).where(Patient.critical_condition == True)).all()  # noqa: E712


def get_patient(session: Session, patient_id: int) -> Optional[Patient]:
    return session.get(Patient, patient_id)


def update_patient(session: Session, patient_id: int, patient_in: PatientUpdate) -> Optional[Patient]:
    patient = session.get(Patient, patient_id)
    if not patient:
        return None
    patient.sqlmodel_update(patient_in.model_dump(exclude_unset=True))
    session.add(patient)
    session.commit()
    session.refresh(patient)
    return patient


def delete_patient(session: Session, patient_id: int) -> bool:
    """
    Delete a patient. Their tests are left in place.
    """
    patient = session.get(Patient, patient_id)
    if not patient:
        return False
    session.delete(patient)
    session.commit()
    logger.info("Deleted patient %s", patient_id)
    return True


# Tests

def latest_test(session: Session, patient_id: int) -> Optional[MedicalTest]:
    query = (
        select(MedicalTest)
        .where(MedicalTest.patient_id == patient_id)
        .order_by(MedicalTest.date.desc(), MedicalTest.id.desc())
        .limit(1)
    )
    return session.exec(query).first()


def update_patient_critical_condition(session: Session, patient_id: int) -> Optional[bool]:
    """
    Recompute a patient's critical flag from their most recent test only.
    Returns the new flag, or None when there is nothing to recompute.
    """
    test = latest_test(session, patient_id)
    patient = session.get(Patient, patient_id)
    if not test or not patient:
        return None

    critical = is_critical(test.type, test.value)
    if patient.critical_condition != critical:
        logger.info("Patient %s critical condition changed to %s", patient_id, critical)
    patient.critical_condition = critical
    session.add(patient)
    session.commit()
    return critical


def create_test(session: Session, patient_id: int, test_in: MedicalTestCreate) -> MedicalTest:
    test = MedicalTest(patient_id=patient_id, type=test_in.type, value=test_in.value)
    session.add(test)
    session.commit()
    session.refresh(test)
    logger.info("Recorded %s test %s for patient %s", test.type.value, test.id, patient_id)

    update_patient_critical_condition(session, patient_id)
    session.refresh(test)
    return test


def list_tests(session: Session, patient_id: int) -> List[MedicalTest]:
    query = (
        select(MedicalTest)
        .where(MedicalTest.patient_id == patient_id)
        .order_by(MedicalTest.date.desc(), MedicalTest.id.desc())
    )
    return session.exec(query).all()


def get_test(session: Session, test_id: int) -> Optional[MedicalTest]:
    return session.get(MedicalTest, test_id)


def update_test(session: Session, test_id: int, test_in: MedicalTestUpdate) -> Optional[MedicalTest]:
    """
    Merge changes into a test. The owner's critical flag is not recomputed.
    """
    test = session.get(MedicalTest, test_id)
    if not test:
        return None
    changes = test_in.model_dump(exclude_unset=True)
    parse_reading(changes.get("type", test.type), changes.get("value", test.value))
    test.sqlmodel_update(changes)
    session.add(test)
    session.commit()
    session.refresh(test)
    return test


def delete_test(session: Session, test_id: int) -> bool:
    """
    Delete a test. The owner's critical flag is not recomputed.
    """
    test = session.get(MedicalTest, test_id)
    if not test:
        return False
    session.delete(test)
    session.commit()
    logger.info("Deleted test %s", test_id)
    return True
