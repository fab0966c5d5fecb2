from fastapi import APIRouter, Depends, HTTPException, Response

from app.security import get_storage
from app.storage.base import Storage
from schemas.stream import StreamCreate, StreamResponse

router = APIRouter()
admin_router = APIRouter()


@router.get("", response_model=list[StreamResponse])
async def list_streams(storage: Storage = Depends(get_storage)):
    return await storage.get_all_streams()


@router.get("/featured", response_model=StreamResponse)
async def get_featured_stream(storage: Storage = Depends(get_storage)):
    stream = await storage.get_featured_stream()
    if not stream:
        raise HTTPException(status_code=404, detail="No featured stream found")
    return stream


@admin_router.post("", response_model=StreamResponse, status_code=201)
async def create_stream(payload: StreamCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_stream(payload.model_dump())


@admin_router.put("/{stream_id}", response_model=StreamResponse)
async def update_stream(stream_id: int, payload: StreamCreate, storage: Storage = Depends(get_storage)):
    stream = await storage.update_stream(stream_id, payload.model_dump())
    if not stream:
        raise HTTPException(status_code=404, detail="Stream not found")
    return stream


@admin_router.put("/{stream_id}/featured", response_model=StreamResponse)
async def set_featured_stream(stream_id: int, storage: Storage = Depends(get_storage)):
    stream = await storage.set_featured_stream(stream_id)
    if not stream:
        raise HTTPException(status_code=404, detail="Stream not found")
    return stream


@admin_router.delete("/{stream_id}", status_code=204)
async def delete_stream(stream_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_stream(stream_id):
        raise HTTPException(status_code=404, detail="Stream not found")
    return Response(status_code=204)
