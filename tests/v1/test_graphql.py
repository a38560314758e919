"""Tests for the GraphQL query surface."""

from typing import Any

from fastapi import status
from fastapi.testclient import TestClient

from patchql.services.cursor import encode_cursor

THREADS_QUERY = """
query Threads($before: String, $after: String, $pageSize: Int!, $privacy: Privacy!,
              $rootsAuthoredBy: [String!], $hasRepliesAuthoredBy: [String!]) {
  threads(before: $before, after: $after, pageSize: $pageSize, privacy: $privacy,
          rootsAuthoredBy: $rootsAuthoredBy, hasRepliesAuthoredBy: $hasRepliesAuthoredBy) {
    pageSize
    threadIds
    nodes { root { keyId } }
    pageInfo { startCursor endCursor hasNextPage }
  }
}
"""


def _execute(client: TestClient, query: str, **variables: Any) -> dict[str, Any]:
    response = client.post("/graphql", json={"query": query, "variables": variables})
    assert response.status_code == status.HTTP_200_OK
    return response.json()


def _threads(client: TestClient, **variables: Any) -> dict[str, Any]:
    variables.setdefault("pageSize", 10)
    variables.setdefault("privacy", "PUBLIC")
    return _execute(client, THREADS_QUERY, **variables)


def test_threads_pagination(client: TestClient, seeder) -> None:
    keys = {seq: seeder.thread(f"%root-{seq}.sha256", seq) for seq in (70, 80, 90, 100)}

    first = _threads(client, pageSize=2)["data"]["threads"]
    assert first["pageSize"] == 2
    assert first["threadIds"] == [keys[100], keys[90]]
    assert first["nodes"] == [{"root": {"keyId": keys[100]}}, {"root": {"keyId": keys[90]}}]
    assert first["pageInfo"] == {
        "startCursor": encode_cursor(100),
        "endCursor": encode_cursor(90),
        "hasNextPage": True,
    }

    second = _threads(client, pageSize=2, after=first["pageInfo"]["endCursor"])["data"]["threads"]
    assert second["threadIds"] == [keys[80], keys[70]]
    assert second["pageInfo"]["hasNextPage"] is False


def test_threads_selectors_are_ored(client: TestClient, seeder) -> None:
    by_alice = seeder.thread("%a.sha256", 10, author="@alice")
    replied_by_bob = seeder.thread("%b.sha256", 20, author="@carol", replies=["@bob"])
    seeder.thread("%c.sha256", 30, author="@dave")

    data = _threads(client, rootsAuthoredBy=["@alice"], hasRepliesAuthoredBy=["@bob"])
    assert data["data"]["threads"]["threadIds"] == [replied_by_bob, by_alice]


def test_threads_private_partition(client: TestClient, seeder) -> None:
    seeder.thread("%public.sha256", 10)
    private = seeder.thread("%private.sha256", 20, is_decrypted=True)
    data = _threads(client, privacy="PRIVATE")
    assert data["data"]["threads"]["threadIds"] == [private]


def test_threads_uses_default_arguments(client: TestClient, seeder) -> None:
    seeder.thread("%root.sha256", 10)
    data = _execute(client, "{ threads { pageSize threadIds } }")
    assert data["data"]["threads"]["pageSize"] == 10
    assert len(data["data"]["threads"]["threadIds"]) == 1


def test_threads_conflicting_cursors(client: TestClient, seeder) -> None:
    seeder.thread("%root.sha256", 10)
    data = _threads(client, before=encode_cursor(1), after=encode_cursor(2))
    assert data["data"] is None
    assert "can't be set at the same time" in data["errors"][0]["message"]


def test_threads_malformed_cursor(client: TestClient, seeder) -> None:
    seeder.thread("%root.sha256", 10)
    data = _threads(client, after="%%%")
    assert data["data"] is None
    assert "Invalid cursor encoding" in data["errors"][0]["message"]


def test_threads_without_matches(client: TestClient) -> None:
    data = _threads(client)
    assert data["data"] is None
    assert data["errors"][0]["message"] == "No results found"


def test_thread_by_root_id(client: TestClient, seeder) -> None:
    key_id = seeder.thread("%root.sha256", 10)
    data = _execute(
        client,
        'query($id: String!) { thread(rootId: $id, orderBy: CAUSAL) { root { keyId } } }',
        id="%root.sha256",
    )
    assert data["data"]["thread"] == {"root": {"keyId": key_id}}


def test_thread_not_found(client: TestClient) -> None:
    data = _execute(client, '{ thread(rootId: "%missing.sha256") { root { keyId } } }')
    assert data["data"] is None
    assert "not found" in data["errors"][0]["message"]


def test_post_by_id(client: TestClient, seeder) -> None:
    key_id = seeder.thread("%post.sha256", 10)
    data = _execute(client, 'query($id: String!) { post(id: $id) { keyId } }', id="%post.sha256")
    assert data["data"]["post"] == {"keyId": key_id}


def test_unsupported_operations(client: TestClient) -> None:
    queries = {
        "posts": "{ posts { keyId } }",
        "author": '{ author(id: "@alice") { id } }',
        "authors": '{ authors(query: "al") { id } }',
        "messageTypes": "{ messageTypes }",
        "messagesByType": '{ messagesByType(messageType: "post") }',
        "message": '{ message(id: "%m.sha256") }',
    }
    for operation, query in queries.items():
        data = _execute(client, query)
        assert data["errors"][0]["message"] == f"{operation} is not supported"
