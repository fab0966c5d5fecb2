from fastapi import APIRouter, Depends, HTTPException, Response

from app.security import get_storage
from app.storage.base import Storage
from schemas.announcement import AnnouncementCreate, AnnouncementResponse

router = APIRouter()
admin_router = APIRouter()


@router.get("", response_model=list[AnnouncementResponse])
async def list_announcements(storage: Storage = Depends(get_storage)):
    return await storage.get_all_announcements()


@admin_router.post("", response_model=AnnouncementResponse, status_code=201)
async def create_announcement(payload: AnnouncementCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_announcement(payload.model_dump())


@admin_router.put("/{announcement_id}", response_model=AnnouncementResponse)
async def update_announcement(
    announcement_id: int,
    payload: AnnouncementCreate,
    storage: Storage = Depends(get_storage)
):
    announcement = await storage.update_announcement(announcement_id, payload.model_dump())
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return announcement


@admin_router.delete("/{announcement_id}", status_code=204)
async def delete_announcement(announcement_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_announcement(announcement_id):
        raise HTTPException(status_code=404, detail="Announcement not found")
    return Response(status_code=204)
