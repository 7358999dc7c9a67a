# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from folio.app import create_app
from folio.config import Settings


@pytest.fixture()
def client(tmp_path):
    settings = Settings(STORAGE_ROOT=str(tmp_path / "data"), DURABLE_WRITES=False)
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def _create_folder(client, name, parent=None):
    response = client.post("/api/folders/", json={"name": name, "parent_folder_id": parent})
    assert response.status_code == 201
    return response.json()


def _create_document(client, name, parent=None):
    response = client.post("/api/documents/", json={"name": name, "parent_folder_id": parent})
    assert response.status_code == 201
    return response.json()


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["trash_sweeper_running"] is True


def test_create_and_browse(client):
    folder = _create_folder(client, "Semester")
    doc = _create_document(client, "Week 1", parent=folder["id"])

    assert doc["kind"] == "document"
    assert len(doc["pages"]) == 1
    assert doc["pages"][0]["drawing_data"] == ""

    items = client.get("/api/folders/items", params={"folder_id": folder["id"]}).json()
    assert [i["id"] for i in items] == [doc["id"]]

    root_items = client.get("/api/folders/items").json()
    assert [(i["kind"], i["id"]) for i in root_items] == [("folder", folder["id"])]


def test_not_found_error_body(client):
    response = client.get("/api/documents/missing")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"

    assert client.get("/api/folders/items", params={"folder_id": "missing"}).status_code == 404


def test_move_into_own_subfolder_is_conflict(client):
    parent = _create_folder(client, "Parent")
    child = _create_folder(client, "Child", parent=parent["id"])

    response = client.post(f"/api/folders/{parent['id']}/move", json={"parent_folder_id": child["id"]})
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "integrity_violation"

    path = client.get(f"/api/folders/{child['id']}/path").json()
    assert [f["name"] for f in path] == ["Parent", "Child"]


def test_update_folder_and_document(client):
    folder = _create_folder(client, "Plain")
    updated = client.put(f"/api/folders/{folder['id']}", json={"name": "Painted", "color_hex": "#AA00FF"}).json()
    assert (updated["name"], updated["color_hex"]) == ("Painted", "#AA00FF")

    cleared = client.put(f"/api/folders/{folder['id']}", json={"clear_color": True}).json()
    assert cleared["color_hex"] is None

    doc = _create_document(client, "Draft")
    renamed = client.put(f"/api/documents/{doc['id']}", json={"name": "Final"}).json()
    assert renamed["name"] == "Final"


def test_last_page_cannot_be_deleted(client):
    doc = _create_document(client, "Single page")
    page_id = doc["pages"][0]["id"]

    response = client.delete(f"/api/documents/{doc['id']}/pages/{page_id}")
    assert response.status_code == 409

    added = client.post(f"/api/documents/{doc['id']}/pages", json={"template": "grid"})
    assert added.status_code == 201
    assert added.json()["template"] == "grid"

    remaining = client.delete(f"/api/documents/{doc['id']}/pages/{page_id}").json()
    assert [p["id"] for p in remaining["pages"]] == [added.json()["id"]]


def test_trash_lifecycle(client):
    folder = _create_folder(client, "Archive")
    doc = _create_document(client, "Old notes", parent=folder["id"])

    deleted = client.delete(f"/api/folders/{folder['id']}").json()
    assert deleted["permanent"] is False
    assert len(deleted["trash_record_ids"]) == 2

    trash = client.get("/api/trash/").json()
    assert {r["original_id"] for r in trash} == {folder["id"], doc["id"]}
    assert client.get("/api/trash/summary").json()["count"] == 2

    folder_record = next(r for r in trash if r["original_id"] == folder["id"])
    restored = client.post(f"/api/trash/{folder_record['id']}/restore")
    assert restored.status_code == 200
    assert restored.json()["kind"] == "folder"

    doc_record = next(r for r in trash if r["original_id"] == doc["id"])
    assert client.delete(f"/api/trash/{doc_record['id']}").json() == {"status": "purged", "id": doc_record["id"]}
    assert client.delete(f"/api/trash/{doc_record['id']}").status_code == 404

    assert client.get(f"/api/documents/{doc['id']}").status_code == 404
    assert client.get("/api/folders/items", params={"folder_id": folder["id"]}).json() == []


def test_empty_and_sweep(client):
    doc = _create_document(client, "Temp")
    client.delete(f"/api/documents/{doc['id']}")

    sweep = client.post("/api/trash/sweep").json()
    assert sweep["retention_days"] == 30
    assert sweep["purged_ids"] == []
    assert sweep["retained"] == 1

    assert client.delete("/api/trash/").json() == {"status": "emptied", "purged": 1}
    assert client.get("/api/trash/").json() == []


def test_permanent_delete(client):
    doc = _create_document(client, "Gone for good")
    result = client.delete(f"/api/documents/{doc['id']}", params={"permanent": True}).json()
    assert result["permanent"] is True
    assert result["trash_record_ids"] == []
    assert client.get("/api/trash/").json() == []
