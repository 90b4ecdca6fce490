from db.database import Base
from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.sql import func


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    # Case-folded normalized name; carries the case-insensitive unique constraint
    name_key = Column(String(400), nullable=False)
    display_order = Column(Integer, nullable=False)
    # Optimistic locking: version number incremented on each update
    version = Column(Integer, nullable=False, default=1, server_default="1")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        UniqueConstraint("name_key", name="uq_categories_name_key"),
        CheckConstraint("display_order > 0", name="ck_categories_display_order_positive"),
    )

    # SQLAlchemy optimistic concurrency control:
    # - Includes `version` in UPDATE/DELETE statements and increments it on update.
    # - A row changed since it was loaded raises StaleDataError.
    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": lambda v: (v or 0) + 1,
    }

    def __repr__(self):
        return (
            f"<Category(id={self.id}, name='{self.name}', "
            f"display_order={self.display_order})>"
        )
