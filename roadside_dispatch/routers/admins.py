from typing import List

from fastapi import APIRouter, Depends, HTTPException

from .. import schemas
from ..errors import NotFoundError
from ..store import DispatchStore, get_store

router = APIRouter(prefix="/api/admins", tags=["Admins"])


@router.get("", response_model=List[schemas.AdminOut])
def list_admins(store: DispatchStore = Depends(get_store)):
    return store.list_admins()


@router.post("", response_model=schemas.AdminCreated)
def create_admin(admin: schemas.AdminIn, store: DispatchStore = Depends(get_store)):
    return store.create_admin(**admin.model_dump())


@router.put("/{admin_id}", response_model=schemas.Message)
def update_admin(admin_id: int, admin: schemas.AdminIn, store: DispatchStore = Depends(get_store)):
    try:
        store.update_admin(admin_id, **admin.model_dump())
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Admin not found")
    return {"message": "Admin updated successfully"}


@router.delete("/{admin_id}", response_model=schemas.Message)
def delete_admin(admin_id: int, store: DispatchStore = Depends(get_store)):
    try:
        store.delete_admin(admin_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Admin not found")
    return {"message": "Admin deleted successfully"}
