from pydantic import BaseModel, ConfigDict


class SettingsUpdate(BaseModel):
    hourly_rate: float | None = None
    text_size: str | None = None


class SettingsRead(BaseModel):
    hourly_rate: float = 0.0
    text_size: str = "medium"

    model_config = ConfigDict(from_attributes=True)
