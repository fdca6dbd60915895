from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupForm(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    timezone: str | None = None


class LoginForm(BaseModel):
    email: EmailStr
    password: str


class UserRead(BaseModel):
    id: int
    username: str
    email: EmailStr
    is_admin: bool = False
    timezone: str | None = None

    model_config = ConfigDict(from_attributes=True)
