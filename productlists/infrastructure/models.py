"""SQLAlchemy models for database tables.

Provides ORM models for customers, product lists, product list lines
and the scope/type lookup tables.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Session, relationship

from productlists.domain.value_objects import SCOPE_NAMES, TYPE_NAMES
from productlists.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Lookup Models
# ============================================================================


class CustomerModel(Base):
    """Customer owning product lists."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<CustomerModel(id={self.id}, name={self.name})>"


class ProductListScopeModel(Base):
    """Visibility classification of a product list."""

    __tablename__ = "product_list_scopes"

    id = Column(String(10), primary_key=True)
    name = Column(String(50), nullable=False)


class ProductListTypeModel(Base):
    """Kind of product list (default, later, predefined, quote)."""

    __tablename__ = "product_list_types"

    id = Column(String(10), primary_key=True)
    name = Column(String(50), nullable=False)


# ============================================================================
# Product List Models
# ============================================================================


class ProductListModel(Base):
    """Product list model for database persistence.

    Rows are never deleted; ``is_inactive`` marks a removed list.
    """

    __tablename__ = "product_lists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(String(50), nullable=True)
    name = Column(String(300), nullable=True)
    description = Column(Text, nullable=True)
    owner_id = Column(Integer, ForeignKey("customers.id"), nullable=True, index=True)
    scope_id = Column(String(10), ForeignKey("product_list_scopes.id"), nullable=True)
    type_id = Column(String(10), ForeignKey("product_list_types.id"), nullable=True)
    is_inactive = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Relationships
    owner = relationship("CustomerModel", lazy="joined")
    scope = relationship("ProductListScopeModel", lazy="joined")
    type = relationship("ProductListTypeModel", lazy="joined")
    items = relationship(
        "ProductListItemModel",
        back_populates="product_list",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<ProductListModel(id={self.id}, name={self.name})>"


class ProductListItemModel(Base):
    """Catalog item saved in a product list."""

    __tablename__ = "product_list_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_list_id = Column(
        Integer,
        ForeignKey("product_lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_id = Column(String(50), nullable=False)
    sku = Column(String(100), nullable=True)
    display_name = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    description = Column(Text, nullable=True)
    priority_id = Column(String(10), nullable=True)
    priority_name = Column(String(50), nullable=True)
    is_inactive = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Relationships
    product_list = relationship("ProductListModel", back_populates="items")

    def __repr__(self) -> str:
        return f"<ProductListItemModel(id={self.id}, sku={self.sku})>"


def seed_lookups(session: Session) -> None:
    """Insert the scope and type lookup rows when missing.

    Args:
        session: Session to write with; the caller commits.
    """
    for scope_id, name in SCOPE_NAMES.items():
        if session.get(ProductListScopeModel, scope_id) is None:
            session.add(ProductListScopeModel(id=scope_id, name=name))
    for type_id, name in TYPE_NAMES.items():
        if session.get(ProductListTypeModel, type_id) is None:
            session.add(ProductListTypeModel(id=type_id, name=name))
