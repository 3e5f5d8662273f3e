import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import schemas, crud, auth
from ..database import get_db

logger = logging.getLogger("hotel_booking.auth")

router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=schemas.MessageResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, db: Session = Depends(get_db)):
    """
    Register a new account. The password is stored only as a bcrypt hash.
    """
    if crud.get_user_by_email(db, user.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        db_user = crud.create_user(db=db, user=user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to register {user.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error registering user: {e}"
        )

    logger.info(f"Registered user {db_user.id} with role {db_user.role.value}")
    return {"message": "User registered successfully"}


@router.post("/login", response_model=schemas.LoginResponse)
def login(
        credentials: schemas.LoginRequest,
        token_settings: Annotated[auth.TokenSettings, Depends(auth.get_token_settings)],
        db: Session = Depends(get_db),
):
    """
    Exchange email and password for a signed, time-limited bearer token.
    """
    db_user = crud.authenticate_user(db, credentials.email, credentials.password)
    if db_user is None:
        logger.warning(f"Failed login for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    token = auth.create_access_token(db_user.email, token_settings)
    logger.info(f"User {db_user.id} logged in")
    return {
        "message": f"Login successful. Welcome, {db_user.name} (Role: {db_user.role.value})",
        "token": token,
    }
