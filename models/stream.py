from sqlalchemy import Boolean, Column, Integer, String, Text
from app.database import Base


class Stream(Base):
    __tablename__ = "streams"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    url = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String, nullable=False)  # free-text category: IRL|Gaming|...
    is_featured = Column(Boolean, nullable=False, default=False)
