from typing import List

from fastapi import APIRouter, Depends, HTTPException

from .. import schemas
from ..errors import NotFoundError
from ..store import DispatchStore, get_store

router = APIRouter(prefix="/api/contacts", tags=["Contacts"])


@router.get("", response_model=List[schemas.ContactOut])
def list_contacts(store: DispatchStore = Depends(get_store)):
    return store.list_contacts()


@router.post("", response_model=schemas.ContactCreated)
def create_contact(contact: schemas.ContactIn, store: DispatchStore = Depends(get_store)):
    return store.create_contact(**contact.model_dump())


@router.put("/{contact_id}", response_model=schemas.Message)
def update_contact(contact_id: int, contact: schemas.ContactIn, store: DispatchStore = Depends(get_store)):
    try:
        store.update_contact(contact_id, **contact.model_dump())
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Contact not found")
    return {"message": "Contact updated successfully"}


@router.delete("/{contact_id}", response_model=schemas.Message)
def delete_contact(contact_id: int, store: DispatchStore = Depends(get_store)):
    try:
        store.delete_contact(contact_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Contact not found")
    return {"message": "Contact deleted successfully"}
