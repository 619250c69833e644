import logging

from app.db.session import engine, Base

logger = logging.getLogger(__name__)

def init_db():
    """Initialize database tables"""
    # Import all models to ensure they are registered with SQLAlchemy
    from app.models.job import Job  # noqa: F401

    # Create all tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

if __name__ == "__main__":
    init_db()
