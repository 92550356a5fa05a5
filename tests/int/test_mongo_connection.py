import os

import pytest

from config.database import MongoConnection


@pytest.mark.integration
def test_can_ping_test_mongo():
    # CI passes TEST_MONGODB_URI; the connection prefers it over MONGODB_URI.
    uri = os.getenv("TEST_MONGODB_URI")
    if not uri:
        pytest.skip("TEST_MONGODB_URI must be set for integration tests.")

    conn = MongoConnection()
    conn.ping()
    assert conn.collection("posts").name == "posts"
