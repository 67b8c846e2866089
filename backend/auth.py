from typing import Annotated
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session
from starlette import status
from database import get_db
from models.users import User
from passlib.context import CryptContext
from fastapi.security import OAuth2PasswordRequestForm
from crud.transactions import write_transaction
from utils.auth_utils import create_access_token, has_session
from utils.dates import local_now
from utils.errors import PersistenceError, to_http_exception

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("auth")

bycrypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

class CreateUserRequest(BaseModel):
    username: str
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str

class SessionState(BaseModel):
    session: bool

db_dependency = Annotated[Session, Depends(get_db)]

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register_user(
    user: CreateUserRequest,
    db: db_dependency
):
    username = user.username.strip()
    if not username or not user.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username and password are required")
    existing_user = db.query(User).filter(User.username == username).first()
    if existing_user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists")

    hashed_password = bycrypt_context.hash(user.password)
    new_user = User(username=username, hashed_password=hashed_password)
    try:
        with write_transaction(db, "register the user"):
            db.add(new_user)
    except PersistenceError as exc:
        raise to_http_exception(exc) from exc
    logger.info(f"User '{username}' registered")

    access_token = create_access_token(data={"sub": new_user.username})
    return Token(access_token=access_token, token_type="bearer")

@router.post("/login", response_model=Token)
async def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: db_dependency
):
    user = db.query(User).filter(User.username == form_data.username).first()
    if not user or not user.is_active or not bycrypt_context.verify(form_data.password, user.hashed_password):
        logger.warning(f"Failed login for '{form_data.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        with write_transaction(db, "record the login"):
            user.last_login_at = local_now()
    except PersistenceError as exc:
        raise to_http_exception(exc) from exc
    logger.info(f"User '{user.username}' logged in")
    return Token(access_token=create_access_token(data={"sub": user.username}), token_type="bearer")

@router.get("/session", response_model=SessionState)
async def read_session(request: Request):
    """Whether the caller holds a valid token. Never fails."""
    return SessionState(session=has_session(request))

@router.post("/logout")
async def logout():
    # Tokens are stateless; the client discards its copy
    return {"message": "Logged out"}
