from sqlalchemy import Column, String, TIMESTAMP, UniqueConstraint
import uuid
from datetime import datetime
from storelease.models.base import Base
from storelease.vars import ROLE_USER


class User(Base):
    __tablename__ = "user"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, nullable=True, index=True)
    name = Column(String, nullable=False)
    password = Column(String, nullable=True)  # absent for social accounts
    role = Column(String, nullable=False, default=ROLE_USER)
    provider = Column(String, nullable=True)
    provider_id = Column(String, nullable=True)
    created_at = Column(TIMESTAMP, default=datetime.now)
    updated_at = Column(TIMESTAMP, default=datetime.now, onupdate=datetime.now)

    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="_provider_identity_uc"),
    )

    def __repr__(self):
        return f"<User id='{self.id}' email='{self.email}' role='{self.role}'/>"
