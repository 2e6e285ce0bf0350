from datetime import datetime

from pydantic import BaseModel

# Поля формы необязательны: пустые и отсутствующие значения
# отдаются доменному валидатору, чтобы ответ содержал все нарушения
class RegisterReq(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None

class LoginReq(BaseModel):
    email: str
    password: str

class ChangePasswordReq(BaseModel):
    password: str | None = None
    password_confirmation: str | None = None

class AccountResp(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    class Config: from_attributes = True

class ViolationOut(BaseModel):
    code: str
    field: str
    message: str

class ViolationsResp(BaseModel):
    detail: str = "Validation failed"
    violations: list[ViolationOut]
