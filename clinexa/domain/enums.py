"""Domain Enumerations.

Closed value sets used by the patient record entity. Both enums subclass ``str``
so values serialize cleanly for persistence collaborators.
"""

from enum import Enum


class Gender(str, Enum):
    """Administrative gender of a patient. Mutable on the record."""
    MALE = "male"
    FEMALE = "female"
    UNDEFINED = "undefined"


class Race(str, Enum):
    """Race of a patient. Fixed at construction."""
    WHITE = "white"
    AFRICAN_AMERICAN = "african_american"
    NATIVE_AFRICAN = "native_african"
    AMERICAN_INDIAN = "american_indian"
    ASIAN = "asian"
    OTHER = "other"
