"""
Unit tests for serving.workflow_api module.
"""
from urllib.parse import quote

import fitz  # PyMuPDF
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_db, get_session_registry
from serving.session_registry import SessionRegistry
from serving.workflow_api import app


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def client(registry, test_db_session):
    """API client with an isolated registry and in-memory database."""
    app.dependency_overrides[get_session_registry] = lambda: registry
    app.dependency_overrides[get_db] = lambda: test_db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def opened(client, book_pdf):
    """Open the 25-page book and return its session id."""
    response = client.post(
        "/documents",
        files={"file": ("report.pdf", book_pdf, "application/pdf")}
    )
    assert response.status_code == 200
    return response.json()["session_id"]


class TestDocuments:
    """Tests for document endpoints."""
    
    def test_open_document(self, client, book_pdf):
        """Test opening returns the resolved outline."""
        response = client.post(
            "/documents",
            files={"file": ("report.pdf", book_pdf, "application/pdf")}
        )
        body = response.json()
        
        assert response.status_code == 200
        assert body["total_pages"] == 25
        assert [node["title"] for node in body["outline"]] == ["Intro", "Body", "End"]
        assert body["outline"][1]["children"][1]["end_page"] == 19
    
    def test_rejects_non_pdf(self, client, registry):
        """Test non-PDF uploads are refused and no session is kept."""
        response = client.post(
            "/documents",
            files={"file": ("notes.txt", b"hello", "text/plain")}
        )
        
        assert response.status_code == 400
        assert len(registry) == 0
    
    def test_rejects_corrupt_pdf(self, client):
        """Test unreadable PDFs are refused."""
        response = client.post(
            "/documents",
            files={"file": ("broken.pdf", b"not a pdf", "application/pdf")}
        )
        
        assert response.status_code == 400
    
    def test_unknown_session(self, client):
        """Test unknown ids give 404."""
        assert client.get("/documents/missing").status_code == 404
    
    def test_replace_document(self, client, opened, plain_pdf):
        """Test replacing resets outline and selection."""
        client.post(f"/documents/{opened}/selection/range", json={"start": 1, "end": 3, "select": True})
        
        response = client.put(
            f"/documents/{opened}",
            files={"file": ("plain.pdf", plain_pdf, "application/pdf")}
        )
        
        assert response.json()["total_pages"] == 5
        assert client.get(f"/documents/{opened}/selection").json()["count"] == 0
    
    def test_close_document(self, client, opened):
        """Test closing removes the session."""
        assert client.delete(f"/documents/{opened}").status_code == 200
        assert client.get(f"/documents/{opened}").status_code == 404


class TestSelection:
    """Tests for selection endpoints."""
    
    def test_toggle_range(self, client, opened):
        """Test selecting then deselecting part of a range."""
        client.post(f"/documents/{opened}/selection/range", json={"start": 1, "end": 5, "select": True})
        response = client.post(
            f"/documents/{opened}/selection/range",
            json={"start": 3, "end": 4, "select": False}
        )
        
        assert response.json()["pages"] == [1, 2, 5]
    
    def test_toggle_without_select_flips(self, client, opened):
        """Test an omitted 'select' behaves like a checkbox."""
        url = f"/documents/{opened}/selection/range"
        
        assert client.post(url, json={"start": 5, "end": 8}).json()["count"] == 4
        assert client.post(url, json={"start": 5, "end": 8}).json()["count"] == 0
    
    def test_flip_range_past_document_end(self, client, opened):
        """Test a flipped range longer than the document deselects on the second call."""
        url = f"/documents/{opened}/selection/range"
        
        assert client.post(url, json={"start": 1, "end": 100}).json()["count"] == 25
        assert client.post(url, json={"start": 1, "end": 100}).json()["count"] == 0
    
    def test_select_pages_spec(self, client, opened):
        """Test page specs and the suggested name."""
        response = client.post(f"/documents/{opened}/selection/pages", json={"pages": "10-11,30"})
        body = response.json()
        
        assert body["pages"] == [10, 11]
        assert body["first_page"] == 10
        assert body["suggested_filename"] == "report_Body.B.pdf"
    
    def test_huge_page_range_bounded_by_document(self, client, opened):
        """Test a range far past the last page only selects the document's pages."""
        response = client.post(
            f"/documents/{opened}/selection/pages",
            json={"pages": "3-9000000000000"}
        )
        
        assert response.status_code == 200
        assert response.json()["pages"] == list(range(3, 26))
    
    def test_bad_page_spec(self, client, opened):
        """Test malformed specs give 400."""
        response = client.post(f"/documents/{opened}/selection/pages", json={"pages": "3-1"})
        
        assert response.status_code == 400
    
    def test_clear_selection(self, client, opened):
        """Test clearing."""
        client.post(f"/documents/{opened}/selection/range", json={"start": 1, "end": 25, "select": True})
        
        response = client.delete(f"/documents/{opened}/selection")
        
        assert response.json() == {
            "pages": [],
            "count": 0,
            "first_page": None,
            "suggested_filename": None
        }
    
    def test_outline_checked_state(self, client, opened):
        """Test outline checkboxes follow the selection."""
        client.post(f"/documents/{opened}/selection/range", json={"start": 20, "end": 25, "select": True})
        
        outline = client.get(f"/documents/{opened}").json()["outline"]
        
        assert outline[2]["checked"] is True
        assert outline[0]["checked"] is False


class TestNavigation:
    """Tests for locate and jump endpoints."""
    
    def test_locate(self, client, opened):
        """Test the deepest node and its path."""
        body = client.get(f"/documents/{opened}/locate", params={"page": 6}).json()
        
        assert body["node"]["title"] == "Body.A"
        assert body["path"] == ["Body", "Body.A"]
    
    def test_locate_miss(self, client, opened):
        """Test a page past the end has no node."""
        body = client.get(f"/documents/{opened}/locate", params={"page": 99}).json()
        
        assert body["node"] is None
        assert body["path"] == []
    
    def test_jump(self, client, opened):
        """Test jumps are clamped."""
        response = client.put(f"/documents/{opened}/current-page", json={"page": 70})
        
        assert response.json() == {"current_page": 25}


class TestExport:
    """Tests for the export endpoint."""
    
    def test_export_without_selection(self, client, opened):
        """Test export is refused while nothing is selected."""
        assert client.post(f"/documents/{opened}/export").status_code == 409
    
    def test_export_download(self, client, opened):
        """Test the download holds the selected pages and suggested name."""
        client.post(f"/documents/{opened}/selection/pages", json={"pages": "20,3"})
        
        response = client.post(f"/documents/{opened}/export")
        
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert quote("report_Intro.pdf") in response.headers["content-disposition"]
        doc = fitz.open(stream=response.content, filetype="pdf")
        assert [page.get_text().strip() for page in doc] == ["Page 3", "Page 20"]
        doc.close()
    
    def test_export_custom_name(self, client, opened):
        """Test a requested filename is used."""
        client.post(f"/documents/{opened}/selection/pages", json={"pages": "1"})
        
        response = client.post(f"/documents/{opened}/export", json={"filename": "cover"})
        
        assert quote("cover.pdf") in response.headers["content-disposition"]
    
    def test_export_failure_verbatim(self, client, opened, registry):
        """Test slicer errors come back unchanged."""
        async def failing_slicer(data, pages):
            raise ValueError("Pages out of range")
        
        registry.get(opened).slicer = failing_slicer
        client.post(f"/documents/{opened}/selection/pages", json={"pages": "1"})
        
        response = client.post(f"/documents/{opened}/export")
        
        assert response.status_code == 500
        assert response.json()["detail"] == "Pages out of range"


class TestAssistantSettings:
    """Tests for assistant settings endpoints."""
    
    def test_defaults(self, client):
        """Test settings before anything is saved."""
        body = client.get("/settings/assistant").json()
        
        assert body["has_api_key"] is False
        assert body["model_id"] in body["available_models"]
    
    def test_save_and_read(self, client):
        """Test saving settings; the key itself is never echoed."""
        response = client.put(
            "/settings/assistant",
            json={"model_id": "gemini-1.5-pro", "api_key": "secret"}
        )
        
        assert response.status_code == 200
        assert "secret" not in response.text
        body = client.get("/settings/assistant").json()
        assert body == {
            "model_id": "gemini-1.5-pro",
            "has_api_key": True,
            "available_models": body["available_models"]
        }
    
    def test_unknown_model(self, client):
        """Test unknown models are refused."""
        response = client.put("/settings/assistant", json={"model_id": "nope"})
        
        assert response.status_code == 400
