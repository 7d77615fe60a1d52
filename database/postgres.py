from sqlalchemy import create_engine, pool
from sqlalchemy.orm import sessionmaker, registry
from config.settings import settings
import logging

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL
logger.info(f"Application connecting to database: {DATABASE_URL.split('@')[-1]}")


def build_engine(url: str):
    """Create an engine with pool settings suited to the backend."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return create_engine(
        url,
        poolclass=pool.QueuePool,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_pre_ping=True,
        echo=False,
        connect_args={"connect_timeout": 10},
    )


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False  # Prevent detached instance issues
)

mapper_registry = registry()
Base = mapper_registry.generate_base()


def configure_mappers():
    """Configure SQLAlchemy mappers dynamically to avoid circular imports."""
    from database import get_db_models

    get_db_models()
    mapper_registry.configure()
    logger.info("Mappers configured successfully.")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    configure_mappers()
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized with tables")
