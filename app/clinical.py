"""
Classification of a single test reading against fixed clinical bands.
"""
from enum import Enum
from typing import Tuple, Union


class MedicalTestType(str, Enum):
    BLOOD_PRESSURE = "Blood Pressure"
    RESPIRATORY_RATE = "Respiratory Rate"
    BLOOD_OXYGEN_LEVEL = "Blood Oxygen Level"
    HEARTBEAT_RATE = "Heartbeat Rate"


def parse_reading(test_type: Union[MedicalTestType, str], value: str) -> Tuple[float, ...]:
    """
    Parse a raw test value into numbers.

    Blood pressure is "systolic/diastolic"; every other known type is a bare
    number. Unknown types parse to an empty tuple. Raises ValueError when the
    value does not fit its type.
    """
    try:
        test_type = MedicalTestType(test_type)
    except ValueError:
        return ()

    if test_type is MedicalTestType.BLOOD_PRESSURE:
        parts = value.split("/")
        if len(parts) != 2:
            raise ValueError(f"Blood pressure must be 'systolic/diastolic', got {value!r}")
        return float(parts[0]), float(parts[1])

    return (float(value),)


def is_critical(test_type: Union[MedicalTestType, str], value: str) -> bool:
    reading = parse_reading(test_type, value)
    if not reading:
        return False

    test_type = MedicalTestType(test_type)
    if test_type is MedicalTestType.BLOOD_PRESSURE:
        systolic, diastolic = reading
        return systolic > 180 or systolic < 90 or diastolic > 120 or diastolic < 60

    (number,) = reading
    if test_type is MedicalTestType.RESPIRATORY_RATE:
        return number > 30 or number < 12
    if test_type is MedicalTestType.BLOOD_OXYGEN_LEVEL:
        return number < 90
    if test_type is MedicalTestType.HEARTBEAT_RATE:
        return number > 100 or number < 60
    return False
