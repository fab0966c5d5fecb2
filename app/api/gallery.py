from fastapi import APIRouter, Depends, HTTPException, Response

from app.security import get_storage
from app.storage.base import Storage
from schemas.gallery import GalleryImageCreate, GalleryImageResponse

router = APIRouter()
admin_router = APIRouter()


@router.get("", response_model=list[GalleryImageResponse])
async def list_gallery_images(storage: Storage = Depends(get_storage)):
    return await storage.get_all_gallery_images()


@admin_router.post("", response_model=GalleryImageResponse, status_code=201)
async def create_gallery_image(payload: GalleryImageCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_gallery_image(payload.model_dump())


@admin_router.put("/{image_id}", response_model=GalleryImageResponse)
async def update_gallery_image(image_id: int, payload: GalleryImageCreate, storage: Storage = Depends(get_storage)):
    image = await storage.update_gallery_image(image_id, payload.model_dump())
    if not image:
        raise HTTPException(status_code=404, detail="Gallery image not found")
    return image


@admin_router.delete("/{image_id}", status_code=204)
async def delete_gallery_image(image_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_gallery_image(image_id):
        raise HTTPException(status_code=404, detail="Gallery image not found")
    return Response(status_code=204)
