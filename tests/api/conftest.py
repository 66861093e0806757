import asyncio

import pytest

from tests.conftest import VALID_PASSWORD

CREATE_USER = """
mutation CreateUser($input: CreateUserInput!) {
  createUser(createUserInput: $input) { _id email }
}
"""


def graphql(client, query: str, variables: dict = None) -> dict:
    response = client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def alice(users_service):
    return asyncio.run(users_service.create("alice@chatter.io", VALID_PASSWORD))


@pytest.fixture
def logged_in_client(client, alice):
    response = client.post("/auth/login", json={"email": "alice@chatter.io", "password": VALID_PASSWORD})
    assert response.status_code == 200
    return client
