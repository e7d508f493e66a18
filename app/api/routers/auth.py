from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.exceptions import InvalidCredentials
from app.domain.schemas import LoginRequest, MessageOut
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=MessageOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Checks the credentials only, no token or session is issued.
    """
    service = UserService(db)
    try:
        service.login(payload)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e))
    return {"message": "Login successful"}
