from sqlalchemy import Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.common import IntegerPrimaryKeyMixin, TimestampMixin


class Mod(IntegerPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "mods"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    size: Mapped[str | None] = mapped_column(String(64), nullable=True)
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    author_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    author = relationship("User", back_populates="mods")
    screenshots = relationship(
        "Screenshot",
        back_populates="mod",
        cascade="all, delete-orphan",
        order_by="Screenshot.id",
    )
    ratings = relationship("Rating", back_populates="mod", cascade="all, delete-orphan")

    @property
    def author_name(self) -> str | None:
        return self.author.name if self.author else None

    @property
    def screenshot_urls(self) -> list[str]:
        return [shot.url for shot in self.screenshots]
