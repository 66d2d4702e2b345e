"""Task model."""

from datetime import date, datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text, false, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kitchen_prep.extensions import db
from kitchen_prep.models.base import utcnow


PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"
PRIORITIES = (PRIORITY_NORMAL, PRIORITY_HIGH)


class Task(db.Model):
    """Dated prep task assigned to a station."""

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("priority IN ('normal', 'high')", name="ck_tasks_priority"),
        Index("idx_tasks_target_date", "target_date"),
        Index("idx_tasks_station_id", "station_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    station_id: Mapped[int] = mapped_column(
        ForeignKey("stations.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(
        String(10), default=PRIORITY_NORMAL, server_default=text("'normal'"), nullable=False
    )
    target_date: Mapped[date] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, server_default=func.now())
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_done: Mapped[bool] = mapped_column(default=False, server_default=false(), nullable=False)

    # Relationships
    station: Mapped["Station"] = relationship("Station", back_populates="tasks")  # noqa: F821

    @property
    def station_name(self) -> str | None:
        return self.station.name if self.station else None

    def __repr__(self) -> str:
        return f"<Task {self.id} station={self.station_id} {self.target_date}>"
