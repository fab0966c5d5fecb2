from schemas.base import CamelModel


class ChannelStats(CamelModel):
    is_live: bool = False
    viewers: int = 0
    followers: int = 0
    subscribers: int = 0
