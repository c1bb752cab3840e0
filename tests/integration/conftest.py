import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from contract_analyzer.config.settings import Settings
from contract_analyzer.database.connection import (
    apply_schema,
    close_pool,
    get_connection,
    init_pool,
)
from contract_analyzer.database.models import DocumentRecord
from contract_analyzer.database.repositories.documents_repository import DocumentsRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "contract_analyzer_test")
    return Settings(analysis_provider="example")


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        psycopg.connect(
            host=test_settings.db_host,
            port=test_settings.db_port,
            dbname=test_settings.db_database,
            user=test_settings.db_username,
            password=test_settings.db_password,
            connect_timeout=3,
        ).close()
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    init_pool(test_settings)
    try:
        apply_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for document_id in cleanup:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
        conn.commit()


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def seed_document(
    integration_cleanup: list[str],
    files_root: Path,
) -> DocumentRecord:
    document_id = str(uuid.uuid4())
    location = f"documents/{document_id}/contract.txt"
    path = files_root / location
    path.parent.mkdir(parents=True)
    path.write_text("This Agreement is made between Acme Corp and Globex LLC.")

    record = DocumentRecord(
        id=document_id,
        file_name="contract.txt",
        file_size=path.stat().st_size,
        content_type="text/plain",
        location=location,
    )
    DocumentsRepository().insert(record)
    integration_cleanup.append(document_id)
    return record
