from sqlalchemy.orm import Session
from models.user import User
from store.enums import Role
from utils.auth import hash_password
from config.settings import settings
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


def bootstrap_admin(db: Session):
    """Seed the ADMIN user from settings if none exists yet."""
    logger.info("Starting ADMIN bootstrap process...")

    admin = db.query(User).filter(User.role == Role.ADMIN).first()
    if admin:
        logger.info("ADMIN already seeded. Skipping bootstrap.")
        return admin

    if not settings.BOOTSTRAP_ADMIN_EMAIL or not settings.BOOTSTRAP_ADMIN_PASSWORD:
        logger.warning("BOOTSTRAP_ADMIN_EMAIL/BOOTSTRAP_ADMIN_PASSWORD not set. Skipping bootstrap.")
        return None

    admin = User(
        name="Admin",
        email=settings.BOOTSTRAP_ADMIN_EMAIL.strip().lower(),
        password_hash=hash_password(settings.BOOTSTRAP_ADMIN_PASSWORD),
        role=Role.ADMIN,
        is_active=True,
        created_by=None,
        created_at=datetime.now(timezone.utc),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    # Self-reference the creator once the id exists
    admin.created_by = admin.id
    db.commit()

    logger.info(f"ADMIN seeded with ID {admin.id}")
    return admin
