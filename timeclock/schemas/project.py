from pydantic import BaseModel, ConfigDict


class ProjectPayload(BaseModel):
    name: str | None = None


class ProjectRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
