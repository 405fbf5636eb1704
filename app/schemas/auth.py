from pydantic import BaseModel, EmailStr, Field

from app.models.enums import Role

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=200)
    organization_id: int
    role: Role = Role.viewer

class AccessTokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

class MeOut(BaseModel):
    id: int
    email: str
    role: Role
    organization_id: int
    parent_organization_id: int | None = None
