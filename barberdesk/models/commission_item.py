from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from barberdesk.database import Base


class CommissionItem(Base):
    """Per-sale commission line. Tracked in parallel with the payout ledger."""

    __tablename__ = "commission_items"

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
    booking_id = Column(
        Integer,
        ForeignKey("bookings.id", ondelete="SET NULL"),
        nullable=True,
    )
    source_type = Column(String(20), nullable=False, default="APPOINTMENT")
    occurred_at = Column(DateTime, nullable=False, index=True)
    gross_amount = Column(Numeric(12, 2), nullable=False, default=0)
    applied_commission_rate = Column(Numeric(5, 2), nullable=False)
    commission_amount = Column(Numeric(12, 2), nullable=False, default=0)
    payment_status = Column(String(20), nullable=False, default="PENDING", index=True)
    paid_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    professional = relationship("Professional")

    SOURCE_TYPES = ["APPOINTMENT", "ORDER", "INVOICE", "OTHER"]
    PAYMENT_STATUSES = ["PENDING", "PAID"]

    def __repr__(self):
        return f"<CommissionItem {self.id} pro={self.professional_id} ({self.payment_status})>"


class CommissionPaymentLog(Base):
    __tablename__ = "commission_payment_logs"

    id = Column(Integer, primary_key=True)
    barbershop_id = Column(
        Integer,
        ForeignKey("barbershops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    professional_id = Column(Integer, ForeignKey("professionals.id"), nullable=True)
    commission_item_ids = Column(JSON, nullable=False, default=list)
    paid_by_user_id = Column(Integer, nullable=True)
    note = Column(Text, nullable=True)
    paid_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<CommissionPaymentLog {self.id} items={len(self.commission_item_ids or [])}>"
