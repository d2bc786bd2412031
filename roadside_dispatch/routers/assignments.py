from typing import List

from fastapi import APIRouter, Depends

from .. import schemas
from ..store import DispatchStore, get_store

router = APIRouter(prefix="/api/assignments", tags=["Assignments"])


@router.get("", response_model=List[schemas.AssignmentView])
def list_assignments(store: DispatchStore = Depends(get_store)):
    return store.list_assignments()


@router.post("", response_model=schemas.Message)
def upsert_assignment(assignment: schemas.AssignmentIn, store: DispatchStore = Depends(get_store)):
    # One assignment per request: posting again replaces the contact and user
    store.upsert_assignment(
        assignment.request_id,
        assignment.contact_id,
        assignment.user_id,
        assignment.status,
    )
    return {"message": "Assignment created/updated successfully"}
