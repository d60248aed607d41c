from enum import Enum


class ApplicationStatus(str, Enum):
    WISHLIST = "WISHLIST"
    APPLIED = "APPLIED"
    SCREENING = "SCREENING"
    INTERVIEW_HR = "INTERVIEW_HR"
    INTERVIEW_USER = "INTERVIEW_USER"
    OFFERING = "OFFERING"
    REJECTED = "REJECTED"
    GHOSTED = "GHOSTED"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
