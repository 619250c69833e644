import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["ENABLE_WORKER_DISPATCH"] = "false"
os.environ["BACKEND_CORS_ORIGINS"] = "https://traceyourcase.com,http://localhost:3000"
os.environ["OPENAI_API_KEY"] = "test-key"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.session import get_db
from app.models import Base
from app.services.ai.summarizer import SummarizationService, get_summarization_service
from app.services.job_store import JobStore
from app.services.storage import LocalBlobStore, get_blob_store
from tests.factories import JobFactory, make_pdf
from tests.fakes import FakeAIService

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db_session):
    """Opens extra sessions on the test database, e.g. a second worker."""
    return TestingSessionLocal


@pytest.fixture
def job_store(db_session):
    return JobStore(db_session)


@pytest.fixture
def blob_store(tmp_path):
    """Local blob store rooted in a per-test directory."""
    return LocalBlobStore(str(tmp_path / "blobs"), public_base_url="https://files.traceyourcase.test")


@pytest.fixture
def fake_ai():
    return FakeAIService()


@pytest.fixture
def summarizer(fake_ai):
    return SummarizationService(fake_ai)


@pytest.fixture(scope="function")
def override_dependencies(db_session, blob_store, summarizer):
    """Point the app at the test database, blob store and fake provider."""
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_summarization_service] = lambda: summarizer
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(override_dependencies):
    """Create an async HTTP client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_pdf():
    return make_pdf()


@pytest.fixture
def pending_job(db_session, blob_store, sample_pdf):
    """A pending job whose PDF is already in the blob store."""
    job = JobFactory.build()
    blob_store.put(job.storage_path, sample_pdf, "application/pdf")
    job.size_bytes = len(sample_pdf)
    db_session.add(job)
    db_session.commit()
    db_session.refresh(job)
    return job


@pytest.fixture
def mock_celery(mocker):
    """Mock the worker task so nothing talks to a broker."""
    return mocker.patch("app.tasks.brief_tasks.process_next_job.delay")


@pytest.fixture(autouse=True)
def mock_external_services(mocker):
    """Auto-mock external clients to prevent real network calls during tests."""
    mocker.patch("app.services.storage.boto3.client")
    mocker.patch("app.services.ai.providers.AsyncOpenAI")
    mocker.patch("app.services.ai.providers.AsyncAnthropic")
