from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session
from app import crud
from app.database import get_session
from app.models import (
    MedicalTest,
    MedicalTestCreate,
    MedicalTestSummary,
    MedicalTestUpdate,
    Message,
    Patient,
    PatientCreate,
    PatientHistory,
    PatientUpdate,
)

router = APIRouter(prefix="/api")

PATIENT_NOT_FOUND = "Patient not found"
TEST_NOT_FOUND = "Test not found"


# Patient-related routes

@router.post("/patients", response_model=Patient, status_code=201, tags=["Patients"])
async def add_patient(patient_in: PatientCreate, session: Session = Depends(get_session)):
    """
    Add a new patient.
    """
    return crud.create_patient(session, patient_in)


@router.get("/patients", response_model=List[Patient], tags=["Patients"])
async def get_all_patients(session: Session = Depends(get_session)):
    """
    Retrieve a list of all patients.
    """
    return crud.list_patients(session)


@router.get("/patients/critical", response_model=List[Patient], tags=["Patients"])
async def get_critical_patients(session: Session = Depends(get_session)):
    """
    Get all patients in critical condition.
    """
    return crud.list_critical_patients(session)


@router.get("/patients/{id}", response_model=Patient, tags=["Patients"])
async def get_patient_by_id(id: int, session: Session = Depends(get_session)):
    patient = crud.get_patient(session, id)
    if not patient:
        raise HTTPException(status_code=404, detail=PATIENT_NOT_FOUND)
    return patient


@router.put("/patients/{id}", response_model=Patient, tags=["Patients"])
async def update_patient(id: int, patient_in: PatientUpdate, session: Session = Depends(get_session)):
    """
    Update patient details. Only the fields present in the body change.
    """
    patient = crud.update_patient(session, id, patient_in)
    if not patient:
        raise HTTPException(status_code=404, detail=PATIENT_NOT_FOUND)
    return patient


@router.delete("/patients/{id}", response_model=Message, tags=["Patients"])
async def delete_patient(id: int, session: Session = Depends(get_session)):
    if not crud.delete_patient(session, id):
        raise HTTPException(status_code=404, detail=PATIENT_NOT_FOUND)
    return Message(message="Patient deleted successfully")


@router.get("/patients/{id}/history", response_model=PatientHistory, tags=["Patients"])
async def get_patient_history(id: int, session: Session = Depends(get_session)):
    """
    Get a patient's personal details along with all of their tests, newest first.
    """
    patient = crud.get_patient(session, id)
    if not patient:
        raise HTTPException(status_code=404, detail=PATIENT_NOT_FOUND)
    return PatientHistory(patient=patient, tests=crud.list_tests(session, id))


# Test-related routes

@router.post("/patients/{id}/tests", response_model=MedicalTest, status_code=201, tags=["Tests"])
async def add_test_for_patient(id: int, test_in: MedicalTestCreate, session: Session = Depends(get_session)):
    """
    Add a new test for a patient and re-evaluate the patient's critical condition.
    """
    if not crud.get_patient(session, id):
        raise HTTPException(status_code=404, detail=PATIENT_NOT_FOUND)
    return crud.create_test(session, id, test_in)


@router.get("/patients/{id}/tests", response_model=List[MedicalTestSummary], tags=["Tests"])
async def get_tests_for_patient(id: int, session: Session = Depends(get_session)):
    """
    Get all tests for a patient, newest first.
    """
    return crud.list_tests(session, id)


@router.get("/patients/{patient_id}/tests/{test_id}", response_model=MedicalTest, tags=["Tests"])
async def get_test_by_id(patient_id: int, test_id: int, session: Session = Depends(get_session)):
    test = crud.get_test(session, test_id)
    if not test:
        raise HTTPException(status_code=404, detail=TEST_NOT_FOUND)
    return test


@router.put("/patients/{id}/tests/{test_id}", response_model=MedicalTest, tags=["Tests"])
async def update_test(id: int, test_id: int, test_in: MedicalTestUpdate, session: Session = Depends(get_session)):
    """
    Update a test. The patient's critical condition is left as it is.
    """
    try:
        test = crud.update_test(session, test_id, test_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not test:
        raise HTTPException(status_code=404, detail=TEST_NOT_FOUND)
    return test


@router.delete("/patients/{id}/tests/{test_id}", response_model=Message, tags=["Tests"])
async def delete_test(id: int, test_id: int, session: Session = Depends(get_session)):
    if not crud.delete_test(session, test_id):
        raise HTTPException(status_code=404, detail=TEST_NOT_FOUND)
    return Message(message="Test deleted successfully")
