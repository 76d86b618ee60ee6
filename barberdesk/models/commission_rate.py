from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from barberdesk.database import Base


class ProfessionalCommission(Base):
    """Current commission rate for a professional within a barbershop."""

    __tablename__ = "professional_commissions"
    __table_args__ = (
        UniqueConstraint(
            "professional_id", "barbershop_id", name="uq_professional_commissions_pro_shop"
        ),
    )

    id = Column(Integer, primary_key=True)
    barbershop_id = Column(
        Integer,
        ForeignKey("barbershops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    professional_id = Column(
        Integer,
        ForeignKey("professionals.id", ondelete="CASCADE"),
        nullable=False,
    )
    commission_rate = Column(Numeric(5, 2), nullable=False, default=50)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    professional = relationship("Professional", back_populates="commission")

    def __repr__(self):
        return f"<ProfessionalCommission pro={self.professional_id} {self.commission_rate}%>"


class CommissionRateHistory(Base):
    __tablename__ = "commission_rate_history"

    id = Column(Integer, primary_key=True)
    barbershop_id = Column(
        Integer,
        ForeignKey("barbershops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    professional_id = Column(
        Integer,
        ForeignKey("professionals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    old_rate_percent = Column(Numeric(5, 2), nullable=True)
    new_rate_percent = Column(Numeric(5, 2), nullable=False)
    changed_by_user_id = Column(Integer, nullable=True)
    changed_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    professional = relationship("Professional")

    def __repr__(self):
        return (
            f"<CommissionRateHistory pro={self.professional_id} "
            f"{self.old_rate_percent} -> {self.new_rate_percent}>"
        )
