"""SyncLog model.

One row per sync invocation. Written at start (status=started) and updated
when the run completes or fails. A row left in "started" means the process
died mid-run.
"""

from datetime import datetime
import enum

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tradeshow.stores.postgres import Base


class SyncStatus(str, enum.Enum):
    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"


class SyncLog(Base):
    """Audit row for a sync run."""

    __tablename__ = "sync_log"

    id: Mapped[int] = mapped_column(primary_key=True)

    sync_type: Mapped[str] = mapped_column(String(50), index=True)
    source: Mapped[str] = mapped_column(String(50))  # apparel_magic | shipstation
    status: Mapped[str] = mapped_column(String(20), default=SyncStatus.STARTED.value)

    records_processed: Mapped[int] = mapped_column(default=0)
    records_created: Mapped[int] = mapped_column(default=0)
    records_updated: Mapped[int] = mapped_column(default=0)
    errors: Mapped[int] = mapped_column(default=0)

    # JSON-serialized text to keep migrations simple
    error_details_json: Mapped[str | None] = mapped_column(Text)

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    duration_seconds: Mapped[int | None] = mapped_column()

    def __repr__(self) -> str:
        return f"<SyncLog {self.sync_type} {self.status}>"
