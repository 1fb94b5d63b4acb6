import asyncio
import os
import tempfile

import pytest

# --- Test environment, set BEFORE importing the application ---
TEST_ROOT = tempfile.mkdtemp(prefix="nutrition-tests-")
UPLOAD_DIR = os.path.join(TEST_ROOT, "uploads")

os.environ["ENVIRONMENT"] = "testing"
os.environ["SQLITE_MODE"] = "true"
os.environ["DB_NAME"] = os.path.join(TEST_ROOT, "nutrition")
os.environ["UPLOAD_DIR"] = UPLOAD_DIR
os.environ["RELOAD"] = "false"
# --- End environment setup ---

from fastapi.testclient import TestClient

from db.database import create_tables, drop_tables
from main import app
from services.file_storage import IP_REPORTS, OP_REPORTS, FOLLOW_UPS


def stored_files(subfolder):
    """Names of the files currently held in an attachment sub-directory"""
    return sorted(os.listdir(os.path.join(UPLOAD_DIR, subfolder)))


@pytest.fixture(autouse=True)
def reset_state():
    """Fresh tables and empty attachment directories for every test"""
    asyncio.run(drop_tables())
    asyncio.run(create_tables())
    for subfolder in (IP_REPORTS, OP_REPORTS, FOLLOW_UPS):
        directory = os.path.join(UPLOAD_DIR, subfolder)
        for name in os.listdir(directory):
            os.remove(os.path.join(directory, name))
    yield


@pytest.fixture
def client():
    return TestClient(app)
