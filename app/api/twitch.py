from fastapi import APIRouter, HTTPException

from app.services.twitch import TrackerError, fetch_channel_stats, is_valid_channel
from schemas.twitch import ChannelStats

router = APIRouter()


@router.get("/{channel}", response_model=ChannelStats)
async def get_channel_stats(channel: str):
    if not is_valid_channel(channel):
        raise HTTPException(status_code=400, detail="Invalid channel name")
    try:
        stats = await fetch_channel_stats(channel)
    except TrackerError:
        raise HTTPException(status_code=502, detail="Failed to fetch stream data")
    return ChannelStats(**stats)
