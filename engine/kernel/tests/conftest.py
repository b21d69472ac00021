"""
Engine kernel test configuration.

Kernel tests are pure or run against MemoryStore with function-scoped
fixtures. PostgresStore tests that need DATABASE_URL are skipped
automatically when it is not set.
"""

import pytest

from engine.kernel.storage import MemoryStore


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def profile_doc():
    """A stored profile with two experience entries and one education entry."""
    return {
        "_id": "prof1",
        "user": "u1",
        "handle": "jdoe",
        "status": "Developer",
        "skills": ["python", "sql"],
        "social": {},
        "experience": [
            {"_id": "e2", "title": "Lead", "company": "Acme", "from": "2020-01-01"},
            {"_id": "e1", "title": "Dev", "company": "Initech", "from": "2016-05-01"},
        ],
        "education": [
            {"_id": "d1", "school": "MIT", "degree": "BSc", "fieldOfStudy": "CS", "from": "2012-09-01"},
        ],
        "date": "2024-01-01T00:00:00+00:00",
    }


@pytest.fixture
def post_doc():
    return {
        "_id": "p1",
        "user": "u1",
        "text": "Hello from the first post",
        "name": "Jane",
        "likes": [],
        "comments": [],
        "date": "2024-01-01T00:00:00+00:00",
    }
