from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Enum, Index
from datetime import datetime
from sqlalchemy.orm import relationship
import enum
import uuid

from .db import Base


class ActionType(str, enum.Enum):
    CLICK = "click"
    SCROLL = "scroll"
    INPUT = "input"


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    surname = Column(String, nullable=False)
    email = Column(String, nullable=False)
    avatar = Column(String, nullable=True)

    actions = relationship("Action", back_populates="user")

    def __repr__(self) -> str:
        return f"<User username={self.username!r}>"


class Action(Base):
    __tablename__ = "actions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(
        Enum(ActionType, name="action_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False
    )
    component = Column(String, nullable=False)
    value = Column(Text, nullable=True)
    url = Column(String, nullable=False)
    performed_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    user = relationship("User", back_populates="actions", lazy="joined")

    __table_args__ = (
        Index('ix_actions_performed_at', 'performed_at'),
        Index('ix_actions_user_id', 'user_id'),
    )

    def __repr__(self) -> str:
        return f"<Action id={self.id!r} type={self.type!r}>"

    def to_dict(self) -> dict:
        """
        Serialize Action to dictionary for API responses.

        Returns:
            Dictionary with all action fields, the owner reduced to its
            username, datetimes in ISO 8601 format
        """
        return {
            "id": str(self.id),
            "type": self.type.value if isinstance(self.type, ActionType) else self.type,
            "component": self.component,
            "value": self.value,
            "url": self.url,
            "performed_at": self.performed_at.isoformat() if self.performed_at else None,
            "username": self.user.username if self.user else None,
        }
