import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from ignitia.core.errors import PersistenceError
from ignitia.core.security import get_password_hash, verify_password
from ignitia.models import Generation, User, UserCreate
from ignitia.schemas import GenerationCreate

logger = logging.getLogger(__name__)


def create_user(*, session: Session, user_create: UserCreate) -> User:
    db_obj = User.model_validate(
        user_create, update={"hashed_password": get_password_hash(user_create.password)}
    )
    session.add(db_obj)
    session.commit()
    session.refresh(db_obj)
    return db_obj


def get_user_by_email(*, session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == email)
    session_user = session.exec(statement).first()
    return session_user


# Dummy hash to use for timing attack prevention when user is not found
# This is an Argon2 hash of a random password, used to ensure constant-time comparison
DUMMY_HASH = "$argon2id$v=19$m=65536,t=3,p=4$MjQyZWE1MzBjYjJlZTI0Yw$YTU4NGM5ZTZmYjE2NzZlZjY0ZWY3ZGRkY2U2OWFjNjk"


def authenticate(*, session: Session, email: str, password: str) -> User | None:
    db_user = get_user_by_email(session=session, email=email)
    if not db_user:
        # Keep the response time similar whether or not the email exists
        verify_password(password, DUMMY_HASH)
        return None
    verified, updated_password_hash = verify_password(password, db_user.hashed_password)
    if not verified:
        return None
    if updated_password_hash:
        db_user.hashed_password = updated_password_hash
        session.add(db_user)
        session.commit()
        session.refresh(db_user)
    return db_user


# Generations. Every statement below filters on owner_id.

def create_generation(
    *, session: Session, generation_in: GenerationCreate, owner_id: uuid.UUID
) -> Generation:
    db_generation = Generation.model_validate(
        generation_in.model_dump(), update={"owner_id": owner_id}
    )
    try:
        session.add(db_generation)
        session.commit()
        session.refresh(db_generation)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to save generation for owner %s", owner_id)
        raise PersistenceError("Failed to save generation", details=str(e)) from e
    return db_generation


def list_generations(*, session: Session, owner_id: uuid.UUID) -> list[Generation]:
    statement = (
        select(Generation)
        .where(Generation.owner_id == owner_id)
        .order_by(col(Generation.created_at).desc())
    )
    try:
        return list(session.exec(statement).all())
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch generations for owner %s", owner_id)
        raise PersistenceError("Failed to fetch generations", details=str(e)) from e


def get_generation(
    *, session: Session, owner_id: uuid.UUID, generation_id: uuid.UUID
) -> Generation | None:
    statement = select(Generation).where(
        Generation.id == generation_id, Generation.owner_id == owner_id
    )
    try:
        return session.exec(statement).first()
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch generation %s", generation_id)
        raise PersistenceError("Failed to fetch generation", details=str(e)) from e


def delete_generation(
    *, session: Session, owner_id: uuid.UUID, generation_id: uuid.UUID
) -> bool:
    """Delete one owned generation. Returns False when nothing matched."""
    db_generation = get_generation(
        session=session, owner_id=owner_id, generation_id=generation_id
    )
    if not db_generation:
        return False
    try:
        session.delete(db_generation)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Failed to delete generation %s", generation_id)
        raise PersistenceError("Failed to delete generation", details=str(e)) from e
    return True
