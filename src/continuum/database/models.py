"""SQLAlchemy models for continuum database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Boolean,
    TypeDecorator,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DecimalText(TypeDecorator):
    """Decimal stored as its string form, so SQLite never rounds it through REAL."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class UTCDateTime(TypeDecorator):
    """Aware datetime stored as naive UTC and returned with UTC attached."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=UTC)


class Subscription(Base):
    """Subscription or recurring payment model."""

    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, default="")
    amount = Column(DecimalText, nullable=False, default=Decimal("0"))
    billing_cycle = Column(String, nullable=False)
    next_due_date = Column(UTCDateTime, nullable=False)
    category = Column(String, nullable=False)
    notes = Column(String, nullable=False, default="")
    is_subscription = Column(Boolean, default=True, nullable=False)
    created_at = Column(UTCDateTime, default=_utcnow, nullable=False)


class PersonalAsset(Base):
    """Personal asset model."""

    __tablename__ = "personal_assets"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, default="")
    current_value = Column(DecimalText, nullable=False, default=Decimal("0"))
    purchase_date = Column(UTCDateTime, nullable=True)
    category = Column(String, nullable=False)
    notes = Column(String, nullable=False, default="")
    created_at = Column(UTCDateTime, default=_utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=_utcnow, nullable=False)

    # Relationships (owned changes are removed explicitly by delete_asset)
    value_changes = relationship(
        "AssetValueChange", back_populates="asset", order_by="AssetValueChange.id"
    )


class AssetValueChange(Base):
    """Asset value history model."""

    __tablename__ = "asset_value_changes"

    id = Column(Integer, primary_key=True)
    asset_id = Column(Integer, ForeignKey("personal_assets.id"), nullable=False)
    date = Column(UTCDateTime, default=_utcnow, nullable=False)
    previous_value = Column(DecimalText, nullable=False)
    new_value = Column(DecimalText, nullable=False)
    note = Column(String, nullable=True)

    # Relationships
    asset = relationship("PersonalAsset", back_populates="value_changes")


class Warranty(Base):
    """Product warranty model."""

    __tablename__ = "warranties"

    id = Column(Integer, primary_key=True)
    product_name = Column(String, nullable=False, default="")
    purchase_date = Column(UTCDateTime, nullable=False)
    expiry_date = Column(UTCDateTime, nullable=False)
    vendor = Column(String, nullable=True)
    notes = Column(String, nullable=False, default="")
    created_at = Column(UTCDateTime, default=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
