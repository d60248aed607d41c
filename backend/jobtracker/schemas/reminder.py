from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ReminderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    application_id: str | None = Field(None, alias="applicationId")
    reminder_date: datetime | None = Field(None, alias="reminderDate")
