"""SQLAlchemy ORM models for businesses, directors, documents and funding requests"""

import uuid
from sqlalchemy import (
    Column,
    String,
    BigInteger,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Business(Base):
    """Business profile, one per owner"""

    __tablename__ = "business"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Text, nullable=False, unique=True, index=True)
    legal_name = Column(Text, nullable=False)
    business_name = Column(Text, nullable=True)
    entity_type = Column(String(32), nullable=False)
    pan = Column(String(10), nullable=True)
    gstin = Column(String(15), nullable=True)
    udyam = Column(Text, nullable=True)
    sector = Column(Text, nullable=False)
    city = Column(Text, nullable=False)
    state = Column(Text, nullable=False)
    brief_description = Column(Text, nullable=True)
    profile_completion_percent = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    directors = relationship(
        "Director", back_populates="business", cascade="all, delete-orphan", order_by="Director.created_at"
    )
    document_groups = relationship("DocumentGroup", back_populates="business", cascade="all, delete-orphan")
    funding_utilities = relationship("FundingUtility", back_populates="business", cascade="all, delete-orphan")


class Director(Base):
    """Company director with KYC fields"""

    __tablename__ = "director"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(UUID(as_uuid=True), ForeignKey("business.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    dob = Column(Date, nullable=True)
    pan = Column(String(10), nullable=True)
    aadhaar_number = Column(String(12), nullable=True)
    email = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="directors")


class DocumentGroup(Base):
    """Document category bucket with derived upload status"""

    __tablename__ = "document_group"
    __table_args__ = (UniqueConstraint("business_id", "type", name="uq_document_group_business_type"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(UUID(as_uuid=True), ForeignKey("business.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    status = Column(String(32), nullable=False, default="NOT_STARTED")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="document_groups")
    documents = relationship(
        "Document", back_populates="group", cascade="all, delete-orphan", order_by="Document.uploaded_at.desc()"
    )


class Document(Base):
    """Uploaded file metadata"""

    __tablename__ = "document"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    document_group_id = Column(
        UUID(as_uuid=True), ForeignKey("document_group.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_name = Column(Text, nullable=False)
    file_url = Column(Text, nullable=False)
    mime_type = Column(Text, nullable=False)
    file_size_bytes = Column(BigInteger, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    group = relationship("DocumentGroup", back_populates="documents")


class FundingUtility(Base):
    """Funding (loan) request raised by a fundable business"""

    __tablename__ = "funding_utility"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(UUID(as_uuid=True), ForeignKey("business.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    requested_amount = Column(Numeric(15, 2), nullable=True)
    tenure_months = Column(Integer, nullable=True)
    purpose = Column(Text, nullable=True)
    security_type = Column(Text, nullable=True)
    security_available = Column(Boolean, nullable=False, default=False)
    existing_emis = Column(Numeric(15, 2), nullable=True)
    frequency = Column(Text, nullable=True)
    asset_type = Column(Text, nullable=True)
    asset_cost = Column(Numeric(15, 2), nullable=True)
    schemes_interested = Column(JSON, nullable=True)
    status = Column(String(32), nullable=False, default="DRAFT")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="funding_utilities")
