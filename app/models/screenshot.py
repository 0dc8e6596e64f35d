from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.common import IntegerPrimaryKeyMixin


class Screenshot(IntegerPrimaryKeyMixin, Base):
    __tablename__ = "screenshots"

    mod_id: Mapped[int] = mapped_column(ForeignKey("mods.id", ondelete="CASCADE"), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)

    mod = relationship("Mod", back_populates="screenshots")
