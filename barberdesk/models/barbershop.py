from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from barberdesk.database import Base


class Barbershop(Base):
    __tablename__ = "barbershops"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    professionals = relationship(
        "Professional", back_populates="barbershop", order_by="Professional.name"
    )
    bookings = relationship("Booking", back_populates="barbershop")

    def __repr__(self):
        return f"<Barbershop {self.slug}>"
