from typing import List

from fastapi import APIRouter, Depends, HTTPException

from .. import schemas
from ..errors import NotFoundError
from ..store import DispatchStore, get_store

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[schemas.UserOut])
def list_users(store: DispatchStore = Depends(get_store)):
    return store.list_users()


@router.post("", response_model=schemas.UserCreated)
def create_user(user: schemas.UserIn, store: DispatchStore = Depends(get_store)):
    return store.create_user(**user.model_dump())


@router.put("/{user_id}", response_model=schemas.Message)
def update_user(user_id: int, user: schemas.UserIn, store: DispatchStore = Depends(get_store)):
    try:
        store.update_user(user_id, **user.model_dump())
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User updated successfully"}


@router.delete("/{user_id}", response_model=schemas.Message)
def delete_user(user_id: int, store: DispatchStore = Depends(get_store)):
    try:
        store.delete_user(user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted successfully"}
