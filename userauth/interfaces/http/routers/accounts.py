from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ....application.use_cases.authenticate_account import AuthenticateAccount
from ....application.use_cases.change_password import ChangePassword
from ....application.use_cases.register_account import RegisterAccount
from ....domain.entities import AccountCandidate
from ....infrastructure.db import get_db
from ....infrastructure.repositories import AccountRepository
from ....infrastructure.security import CredentialStore, get_credential_store
from ..schemas import AccountResp, ChangePasswordReq, LoginReq, RegisterReq, ViolationsResp

# ValidationFailure и AccountNotFound превращаются в ответы в main.py
router = APIRouter(prefix="/api/accounts", tags=["accounts"])

VALIDATION_RESPONSES = {422: {"model": ViolationsResp}}

@router.post(
    "",
    response_model=AccountResp,
    status_code=status.HTTP_201_CREATED,
    responses=VALIDATION_RESPONSES,
)
def register(
    payload: RegisterReq,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
):
    uc = RegisterAccount(repo=AccountRepository(db), hasher=store)
    account = uc.execute(AccountCandidate(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        password_confirmation=payload.password_confirmation,
    ))
    return AccountResp.model_validate(account)

@router.post("/login", response_model=AccountResp)
def login(
    payload: LoginReq,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
):
    account = AuthenticateAccount(repo=AccountRepository(db), store=store).execute(payload.email, payload.password)
    if account is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return AccountResp.model_validate(account)

@router.get("/{account_id}", response_model=AccountResp)
def get_account(account_id: int, db: Session = Depends(get_db)):
    account = AccountRepository(db).get(account_id)
    if account is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return AccountResp.model_validate(account)

@router.put("/{account_id}/password", response_model=AccountResp, responses=VALIDATION_RESPONSES)
def change_password(
    account_id: int,
    payload: ChangePasswordReq,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
):
    uc = ChangePassword(repo=AccountRepository(db), hasher=store)
    account = uc.execute(account_id, payload.password, payload.password_confirmation)
    return AccountResp.model_validate(account)
