from sqlalchemy import Column, String, Text, TIMESTAMP, Integer, BigInteger
import uuid
from datetime import datetime
from storelease.models.base import Base


class ConsultationRequest(Base):
    __tablename__ = "consultation_request"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(TIMESTAMP, default=datetime.now, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)
    desired_category = Column(String, nullable=False)
    desired_location = Column(String, nullable=False)
    investment_amount = Column(BigInteger, nullable=False)
    details = Column(Text, nullable=True)

    def __str__(self):
        return f"ConsultationRequest(id={self.id}, name={self.name})"
