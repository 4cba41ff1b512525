"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for:
- Document stores (in-memory, and SQLAlchemy on in-memory SQLite)
- City record service wired to a store
- FastAPI test client bound to an isolated store
"""

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from city_directory.application.services.city_record_service import CityRecordService
from city_directory.core.dependencies import get_document_store
from city_directory.infrastructure.persistence import models  # noqa: F401  registers tables on Base
from city_directory.infrastructure.persistence.db import Base
from city_directory.infrastructure.persistence.repositories.in_memory_document_store import (
    InMemoryDocumentStore,
)
from city_directory.infrastructure.persistence.repositories.sqlalchemy_document_store import (
    SQLAlchemyDocumentStore,
)
from city_directory.main import app


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_db_engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)


# ==============================================================================
# STORE FIXTURES
# ==============================================================================

@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def sql_store(test_session_factory) -> SQLAlchemyDocumentStore:
    return SQLAlchemyDocumentStore(test_session_factory)


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request, memory_store, sql_store):
    """Run a test once against each DocumentStore implementation."""
    if request.param == "memory":
        return memory_store
    return sql_store


@pytest.fixture
def record_service(memory_store) -> CityRecordService:
    return CityRecordService(memory_store, collection="cities", max_write_attempts=5)


# ==============================================================================
# API FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def client(memory_store) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client backed by a fresh in-memory store."""
    app.dependency_overrides[get_document_store] = lambda: memory_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==============================================================================
# TEST DATA FACTORIES
# ==============================================================================

@pytest.fixture
def sample_city_documents():
    """Seed documents, including neighbours the API itself never writes."""
    return {
        "paris": {"friends": ["lyon", "marseille"], "neighbour": "versailles"},
        "lyon": {"friends": ["paris"], "neighbour": "villeurbanne"},
        "nantes": {"friends": []},
    }


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# ==============================================================================
# MARKERS
# ==============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: Mark test as an integration test"
    )
