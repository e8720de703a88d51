# backend/app/db/models.py

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class User(Base):
    __tablename__ = "user"

    user_id = Column(Integer, primary_key=True, nullable=False)
    username = Column(Text, unique=True)
    password = Column(Text)
    active = Column(Integer, nullable=False)
    email = Column(Text)

    def __repr__(self):
        return f"<User(username='{self.username}', active={self.active})>"
