"""Station model."""

from datetime import datetime

from sqlalchemy import String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kitchen_prep.extensions import db
from kitchen_prep.models.base import utcnow


class Station(db.Model):
    """Named kitchen work area that owns tasks."""

    __tablename__ = "stations"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, server_default=func.now())

    # Relationships
    tasks: Mapped[list["Task"]] = relationship(  # noqa: F821
        "Task",
        back_populates="station",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Station {self.name}>"
