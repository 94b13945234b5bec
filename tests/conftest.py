import pytest

from ballotbox import create_app
from ballotbox.config import TestingConfig
from ballotbox.database.memory_storage import MemoryStorage
from ballotbox.encryption.password_hashing import PasswordHashingService
from ballotbox.security.token_manager import TokenManager

CANDIDATES = ["Alice Johnson", "Bob Smith", "Charlie Brown"]


@pytest.fixture
def password_service():
    # cheapest parameters argon2 accepts; keeps the suite fast
    return PasswordHashingService(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def storage(password_service):
    store = MemoryStorage(password_service=password_service, token_manager=TokenManager())
    store.connect()
    store.seed_candidates(CANDIDATES)
    yield store
    store.close()


@pytest.fixture
def alice(storage):
    return storage.create_user("alice", "alice@example.com", "pw123")


@pytest.fixture
def app(tmp_path):
    class AuditedTestingConfig(TestingConfig):
        AUDIT_LOG_DIR = str(tmp_path / "audit")

    return create_app(AuditedTestingConfig)


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
