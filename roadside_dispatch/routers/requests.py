from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from .. import schemas
from ..errors import NotFoundError
from ..store import DispatchStore, get_store
from ..uploads import discard_photo, save_photo

router = APIRouter(prefix="/api/requests", tags=["Requests"])


@router.get("", response_model=List[schemas.RequestView])
def list_requests(store: DispatchStore = Depends(get_store)):
    return store.list_requests()


@router.post("", response_model=schemas.RequestCreated)
async def create_request(
    user_info: Optional[str] = Form(None, alias="userInfo"),
    photo: Optional[UploadFile] = File(None),
    store: DispatchStore = Depends(get_store),
):
    # The photo is resolved to a path before the store sees the request
    image_ref = await save_photo(photo)
    try:
        return await run_in_threadpool(store.create_request, user_info, image_ref)
    except Exception:
        await discard_photo(image_ref)
        raise


@router.put("/{request_id}/status", response_model=schemas.Message)
def update_status(request_id: int, body: schemas.StatusUpdate, store: DispatchStore = Depends(get_store)):
    try:
        store.update_request_status(request_id, body.status)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Request not found")
    return {"message": "Request status updated successfully"}


@router.delete("/{request_id}", response_model=schemas.Message)
def delete_request(request_id: int, store: DispatchStore = Depends(get_store)):
    try:
        store.delete_request(request_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Request not found")
    return {"message": "Request deleted successfully"}
