from jobtracker.models.enums import ApplicationStatus, Priority
from jobtracker.models.user import User
from jobtracker.models.application import Application
from jobtracker.models.note import ApplicationNote
from jobtracker.models.tag import Tag, application_tags

__all__ = [
    "ApplicationStatus",
    "Priority",
    "User",
    "Application",
    "ApplicationNote",
    "Tag",
    "application_tags",
]
