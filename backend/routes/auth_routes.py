from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.routes.schemas import ERROR_RESPONSES, ApiModel, StudentResponse
from backend.services import accounts

router = APIRouter(tags=['auth'], responses=ERROR_RESPONSES)


class RegisterRequest(ApiModel):
    email: Any = None
    password: Any = None
    first_name: Any = None
    last_name: Any = None
    birth_date: Any = None


class LoginRequest(ApiModel):
    email: Any = None
    password: Any = None


class AccountResponse(ApiModel):
    id: int
    email: str
    role: str
    created_at: datetime
    student: StudentResponse | None = None


class AuthResponse(ApiModel):
    token: str
    user: AccountResponse


def _auth_response(result: accounts.AuthResult) -> AuthResponse:
    return AuthResponse(token=result.token, user=AccountResponse.model_validate(result.user))


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    result = accounts.register_student(
        db,
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        birth_date=data.birth_date,
    )
    return _auth_response(result)


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    return _auth_response(accounts.login(db, email=data.email, password=data.password))
