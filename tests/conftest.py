import json
import os
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("ENVIRONMENT", "test")

from models import Base
from models.claim import Claim
from utils.vocab_enums import ClaimStatusEnum, DamageSeverityEnum


DEFAULT_DAMAGE = {
    "part": "Bumper",
    "severity": DamageSeverityEnum.LOW.value,
    "image_url": "http://img.com/bumper.jpg",
    "price": 100.0,
}


# -----------------
# ENVIRONMENT MOCKS
# -----------------
@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    """Keep CORS resolution independent from the developer's shell."""
    monkeypatch.setenv("ENV", "dev")
    monkeypatch.delenv("FRONTEND_ORIGIN", raising=False)


# -----------------
# DATABASE FIXTURE
# -----------------
@pytest.fixture(scope="function")
def test_db():
    """Provides a fresh in-memory database for each test function."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


# -----------------
# SEED DATA
# -----------------
@pytest.fixture
def make_claim(test_db):
    """
    Returns a function that stores a claim directly, bypassing the services.

    Damages are given as partial dicts merged over DEFAULT_DAMAGE.
    """
    def _make_claim(title="Test Claim", description="This is a test claim",
                    status=ClaimStatusEnum.PENDING.value, damages=None):
        claim = Claim(title=title, description=description, status=status, total_amount=0.0, damages=[])
        for damage in damages or []:
            claim.add_damage(**{**DEFAULT_DAMAGE, **damage})
        test_db.add(claim)
        test_db.commit()
        test_db.refresh(claim)
        return claim

    return _make_claim


@pytest.fixture
def seed_claim(make_claim):
    """A pending claim with a single 100.00 LOW damage."""
    return make_claim(damages=[{}])


@pytest.fixture
def seed_claim_with_damages(make_claim):
    """A pending claim with a LOW 100.00 and a HIGH 250.50 damage."""
    return make_claim(damages=[
        {"part": "Bumper", "price": 100},
        {"part": "Windshield", "severity": DamageSeverityEnum.HIGH.value, "price": 250.50},
    ])


# -----------------
# API GATEWAY MOCKS
# -----------------
@pytest.fixture
def api_gateway_event():
    """Creates a mock API Gateway event for testing"""

    def _event(http_method="GET", path_params=None, body=None, path="/claims", origin=None):
        headers = {"Content-Type": "application/json"}
        if origin:
            headers["origin"] = origin
        return {
            "httpMethod": http_method,
            "path": path,
            "pathParameters": path_params or {},
            "queryStringParameters": {},
            "headers": headers,
            "body": json.dumps(body) if isinstance(body, (dict, list)) else body,
        }

    return _event