from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.data.database import get_db
from app.domain.exceptions import EmailAlreadyRegistered, UserNotFound
from app.domain.schemas import RegisterUserRequest, UserRead
from app.domain.validation import MAX_ID
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserRead, status_code=201)
def register_user(
    payload: RegisterUserRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        user = service.register(payload)
    except EmailAlreadyRegistered as e:
        #same shape as the request validation errors
        return JSONResponse(status_code=400, content={"email": str(e)})
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int = Path(..., gt=0, le=MAX_ID), db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
