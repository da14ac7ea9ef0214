from sqlalchemy import Column, DateTime, Integer, Text, func

from .db import Base


class Task(Base):
    __tablename__ = "task"
    # AUTOINCREMENT keeps SQLite from reusing ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}

    task_id = Column(Integer, primary_key=True, autoincrement=True)
    topic = Column(Text, nullable=False)
    description = Column(Text, nullable=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())

    def to_dict(self) -> dict:
        return {
            "task_id": self.task_id,
            "topic": self.topic,
            "description": self.description,
            "created_at": self.created_at,
        }
