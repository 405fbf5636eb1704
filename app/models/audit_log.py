from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base

class AuditLog(Base):
    __tablename__ = "audit_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ts: Mapped[datetime] = mapped_column(sa.DateTime(timezone=True), index=True, nullable=False)

    # no FK: entries outlive the users they mention
    user_id: Mapped[int] = mapped_column(sa.Integer, index=True, nullable=False)
    # actor's org captured at write time; read-side scoping filters on this snapshot (see DESIGN.md)
    organization_id: Mapped[int] = mapped_column(sa.Integer, index=True, nullable=False)

    action: Mapped[str] = mapped_column(sa.String(32), nullable=False)
    resource: Mapped[str] = mapped_column(sa.String(64), nullable=False)
    resource_id: Mapped[int] = mapped_column(sa.Integer, nullable=False, server_default="0")

    allowed: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, server_default=sa.true())
    reason: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    meta: Mapped[dict | None] = mapped_column(sa.JSON, nullable=True)

# append-only: nothing in the app updates or deletes rows
