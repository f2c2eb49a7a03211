from sqlalchemy import Column, String, TIMESTAMP, UniqueConstraint
import uuid
from datetime import datetime
from storelease.models.base import Base


class Verification(Base):
    __tablename__ = "verification"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(TIMESTAMP, default=datetime.now)
    type = Column(String, nullable=False)
    target = Column(String, nullable=False)
    code = Column(String, nullable=False)
    expires_at = Column(TIMESTAMP, nullable=False)

    __table_args__ = (UniqueConstraint("type", "target", name="_type_target_uc"),)

    def __repr__(self):
        return f"<Verification type='{self.type}' target='{self.target}'/>"
