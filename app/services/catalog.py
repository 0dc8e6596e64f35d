"""Mod catalog persistence and rating aggregation.

Every write here runs as a single unit of work: the caller's session is
committed once at the end, and rolled back if any statement fails, so a mod is
never visible with half of its screenshots and ``Mod.rating`` always matches the
rating rows that produced it.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.errors import NotFoundError
from app.models.common import utcnow
from app.models.mod import Mod
from app.models.rating import Rating
from app.models.screenshot import Screenshot
from app.models.user import User
from app.schemas.mod import ModRead, ModWrite

logger = logging.getLogger(__name__)


def serialize_mod(mod: Mod) -> ModRead:
    return ModRead(
        id=mod.id,
        title=mod.title,
        description=mod.description,
        icon_url=mod.icon_url,
        size=mod.size,
        rating=mod.rating or 0.0,
        author_id=mod.author_id,
        author_name=mod.author_name,
        created_at=mod.created_at,
        screenshots=mod.screenshot_urls,
    )


def list_mods(db: Session) -> list[Mod]:
    query = (
        select(Mod)
        .options(joinedload(Mod.author), selectinload(Mod.screenshots))
        .order_by(Mod.created_at.desc(), Mod.id.desc())
    )
    return list(db.scalars(query).unique().all())


def get_mod(db: Session, mod_id: int) -> Mod:
    query = (
        select(Mod)
        .options(joinedload(Mod.author), selectinload(Mod.screenshots))
        .where(Mod.id == mod_id)
        .execution_options(populate_existing=True)
    )
    mod = db.scalars(query).unique().one_or_none()
    if mod is None:
        raise NotFoundError("Mod not found")
    return mod


def create_mod(db: Session, payload: ModWrite, author: User | None = None) -> Mod:
    mod = Mod(
        title=payload.title,
        description=payload.description,
        icon_url=payload.icon_url,
        size=payload.size,
        author_id=author.id if author else None,
    )
    try:
        db.add(mod)
        db.flush()
        for url in payload.screenshots or []:
            db.add(Screenshot(mod_id=mod.id, url=url))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("mod_created", extra={"mod_id": mod.id, "author_id": mod.author_id})
    return get_mod(db, mod.id)


def update_mod(db: Session, mod_id: int, payload: ModWrite) -> Mod:
    mod = get_mod(db, mod_id)
    try:
        mod.title = payload.title
        mod.description = payload.description
        mod.icon_url = payload.icon_url
        mod.size = payload.size
        if payload.screenshots is not None:
            # Full replacement; an empty list clears every screenshot.
            mod.screenshots.clear()
            db.flush()
            for url in payload.screenshots:
                mod.screenshots.append(Screenshot(url=url))
        db.add(mod)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("mod_updated", extra={"mod_id": mod_id})
    return get_mod(db, mod_id)


def delete_mod(db: Session, mod_id: int) -> None:
    mod = get_mod(db, mod_id)
    try:
        db.delete(mod)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("mod_deleted", extra={"mod_id": mod_id})


def recalculate_mod_rating(db: Session, mod: Mod) -> float:
    """Store the mean of the mod's current scores on ``mod.rating`` (0 with no ratings).

    Flushes but does not commit; callers own the transaction.
    """
    average = db.scalar(select(func.avg(Rating.score)).where(Rating.mod_id == mod.id))
    mod.rating = float(average or 0.0)
    db.add(mod)
    db.flush()
    return mod.rating


UPSERT_DIALECTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


def _upsert_rating(db: Session, mod_id: int, user_id: int, score: int) -> None:
    """Insert or overwrite the (mod, user) rating in a single statement."""
    insert = UPSERT_DIALECTS.get(db.get_bind().dialect.name)
    if insert is None:
        rating = db.scalar(select(Rating).where(Rating.mod_id == mod_id, Rating.user_id == user_id))
        if rating is None:
            rating = Rating(mod_id=mod_id, user_id=user_id, score=score)
        else:
            rating.score = score
        db.add(rating)
        db.flush()
        return

    now = utcnow()
    stmt = insert(Rating).values(mod_id=mod_id, user_id=user_id, score=score, created_at=now, updated_at=now)
    stmt = stmt.on_conflict_do_update(
        index_elements=["mod_id", "user_id"],
        set_={"score": stmt.excluded.score, "updated_at": now},
    )
    db.execute(stmt)


def rate_mod(db: Session, mod_id: int, user: User, score: int) -> float:
    mod = get_mod(db, mod_id)
    try:
        _upsert_rating(db, mod.id, user.id, score)
        new_rating = recalculate_mod_rating(db, mod)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("mod_rated", extra={"mod_id": mod.id, "user_id": user.id, "score": score})
    return new_rating
