from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.errors import http_error
from storefront.data.database import get_db
from storefront.domain.errors import ServiceError
from storefront.services.user_service import UserService
from storefront.domain.schemas import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    return service.create_user(payload)

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except ServiceError as e:
        raise http_error(e)

@router.put("/{user_id}", response_model=UserRead)
def update_profile(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.update_profile(user_id, payload)
    except ServiceError as e:
        raise http_error(e)
