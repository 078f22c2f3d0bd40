from sqlalchemy import Column, Integer, String, Text

from stockcore.db.base import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(50), nullable=True)
    location = Column(Text, nullable=True)
