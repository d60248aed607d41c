from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    name: str | None = None
    color: str | None = None


class TagResponse(BaseModel):
    id: str
    name: str
    color: str | None
    application_count: int = 0


class ApplicationTagCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tag_id: str | None = Field(None, alias="tagId")


class ApplicationTagResponse(BaseModel):
    application_id: str
    tag_id: str
