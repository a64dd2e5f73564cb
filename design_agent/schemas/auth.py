
from datetime import datetime
from pydantic import EmailStr, Field
from design_agent.schemas.base import CamelModel, CamelIn
from design_agent.utils.security import Role

class RegisterIn(CamelIn):
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)
    first_name: str = Field("", max_length=120)
    last_name: str = Field("", max_length=120)

class LoginIn(CamelIn):
    email: EmailStr
    password: str

class UserOut(CamelModel):
    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None

class AuthOut(CamelModel):
    message: str
    token: str
    user: UserOut
