from enum import Enum


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    COMPANY = "COMPANY"
    ADMIN = "ADMIN"


class JobLevel(str, Enum):
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"


class LocationType(str, Enum):
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    ONSITE = "ONSITE"


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"
    VIEWED = "VIEWED"
    INTERVIEWING = "INTERVIEWING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
