"""
EduPro Backend: API Route Tests
==================================

What:  End-to-end tests through the FastAPI app with HTTPX's ASGI transport.
How:   The identity verifier, search service and database session are injected
       via dependency_overrides; Supabase and the search providers are
       MockTransport fakes and the database is in-memory SQLite.

What we test:
    ✅ Keep-alive probe answers plain text
    ✅ Missing and invalid tokens both get the same generic 401
    ✅ Rejected requests never touch the database
    ✅ Notes and career reports round-trip for the verified owner
    ✅ Search routes expose the SnippetResult shape
    ✅ /health reports database, search and auth mode
"""

import httpx
import pytest

from edupro.services.auth_service import (
    BYPASS_IDENTITY,
    BypassIdentityVerifier,
    SupabaseIdentityVerifier,
)
from edupro.services.search_service import SearchService

GENERIC_401 = {
    "success": False,
    "error": "authentication_failed",
    "message": "Authentication failed.",
}

NOTE_BODY = {
    "title": "Cell Biology",
    "smart_notes": "Mitochondria produce ATP.",
    "mcq_json": [{"q": "Powerhouse of the cell?", "a": "Mitochondria"}],
    "pages": 4,
}


def supabase_verifier(client: httpx.AsyncClient) -> SupabaseIdentityVerifier:
    return SupabaseIdentityVerifier(
        http_client=client,
        supabase_url="https://test-project.supabase.co",
        anon_key="test-anon-key",
    )


def supabase_handler(request: httpx.Request) -> httpx.Response:
    if request.headers.get("Authorization") == "Bearer good-token":
        return httpx.Response(200, json={"email": "student@example.com"})
    return httpx.Response(401, json={"msg": "invalid JWT"})


def search_handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "en.wikipedia.org":
        return httpx.Response(
            200,
            json={"query": {"search": [{"title": "ATP", "snippet": "<b>energy</b> carrier of the cell"}]}},
        )
    return httpx.Response(
        200,
        json={
            "Abstract": "Adenosine triphosphate is the energy currency of the cell.",
            "RelatedTopics": [],
        },
    )


class TestKeepAlive:

    @pytest.mark.asyncio
    async def test_root_answers_plain_text(self, make_test_client):
        client, state = make_test_client(BypassIdentityVerifier())

        response = await client.get("/")

        assert response.status_code == 200
        assert response.text == "Backend is Active! 🚀"
        assert response.headers["content-type"].startswith("text/plain")
        assert state["db_opened"] is False

    @pytest.mark.asyncio
    async def test_request_id_header(self, make_test_client):
        client, _ = make_test_client(BypassIdentityVerifier())

        response = await client.get("/")

        assert len(response.headers["X-Request-ID"]) == 8


class TestIdentityGate:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [("GET", "/api/notes"), ("POST", "/api/notes"), ("GET", "/api/career"), ("POST", "/api/career")],
    )
    async def test_missing_token_is_rejected_before_database(
        self, make_test_client, mock_http, provider_calls, method, path
    ):
        client, state = make_test_client(supabase_verifier(mock_http(supabase_handler)))

        response = await client.request(method, path, json=NOTE_BODY)

        assert response.status_code == 401
        body = response.json()
        assert {k: body[k] for k in GENERIC_401} == GENERIC_401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert provider_calls == []
        assert state["db_opened"] is False

    @pytest.mark.asyncio
    async def test_invalid_token_gets_identical_body(self, make_test_client, mock_http):
        client, state = make_test_client(supabase_verifier(mock_http(supabase_handler)))

        missing = await client.get("/api/notes")
        invalid = await client.get("/api/notes", headers={"Authorization": "Bearer stolen"})

        assert invalid.status_code == 401
        missing_body = {k: v for k, v in missing.json().items() if k != "request_id"}
        invalid_body = {k: v for k, v in invalid.json().items() if k != "request_id"}
        assert missing_body == invalid_body
        assert state["db_opened"] is False

    @pytest.mark.asyncio
    async def test_valid_token_reaches_handler(self, make_test_client, mock_http):
        client, state = make_test_client(supabase_verifier(mock_http(supabase_handler)))

        response = await client.get("/api/notes", headers={"Authorization": "Bearer good-token"})

        assert response.status_code == 200
        assert response.json() == []
        assert state["db_opened"] is True


class TestNotesRoutes:

    @pytest.mark.asyncio
    async def test_create_then_list(self, make_test_client):
        client, _ = make_test_client(BypassIdentityVerifier())

        created = await client.post("/api/notes", json=NOTE_BODY)

        assert created.status_code == 200
        body = created.json()
        assert body["success"] is True
        assert body["note"]["email"] == BYPASS_IDENTITY
        assert body["note"]["title"] == "Cell Biology"

        listed = await client.get("/api/notes")
        assert listed.status_code == 200
        notes = listed.json()
        assert len(notes) == 1
        assert notes[0]["id"] == body["note"]["id"]
        assert notes[0]["mcq_json"] == NOTE_BODY["mcq_json"]

    @pytest.mark.asyncio
    async def test_client_supplied_email_is_ignored(self, make_test_client):
        client, _ = make_test_client(BypassIdentityVerifier())

        created = await client.post(
            "/api/notes", json={**NOTE_BODY, "email": "victim@example.com"}
        )

        assert created.json()["note"]["email"] == BYPASS_IDENTITY

    @pytest.mark.asyncio
    async def test_missing_title_is_rejected(self, make_test_client):
        client, _ = make_test_client(BypassIdentityVerifier())

        response = await client.post("/api/notes", json={"smart_notes": "no title"})

        assert response.status_code == 422
        errors = response.json()["detail"]
        assert any(error["loc"][-1] == "title" for error in errors)


class TestCareerRoutes:

    @pytest.mark.asyncio
    async def test_create_then_list(self, make_test_client):
        client, _ = make_test_client(BypassIdentityVerifier())

        created = await client.post(
            "/api/career", json={"role": "Data Scientist", "report_html": "<h2>Plan</h2>"}
        )

        assert created.status_code == 200
        assert created.json()["success"] is True

        reports = (await client.get("/api/career")).json()
        assert len(reports) == 1
        assert reports[0]["role"] == "Data Scientist"
        assert reports[0]["email"] == BYPASS_IDENTITY

    @pytest.mark.asyncio
    async def test_missing_role_is_rejected(self, make_test_client):
        client, _ = make_test_client(BypassIdentityVerifier())

        response = await client.post("/api/career", json={"report_html": "<p/>"})

        assert response.status_code == 422


class TestSearchRoutes:

    @pytest.mark.asyncio
    async def test_web_search(self, make_test_client, mock_http):
        client, _ = make_test_client(
            BypassIdentityVerifier(), SearchService(mock_http(search_handler))
        )

        response = await client.get("/api/search", params={"q": "ATP", "max_results": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["snippets"].startswith("[1] Adenosine triphosphate")

    @pytest.mark.asyncio
    async def test_wikipedia_search(self, make_test_client, mock_http):
        client, _ = make_test_client(
            BypassIdentityVerifier(), SearchService(mock_http(search_handler))
        )

        response = await client.get("/api/search/wikipedia", params={"q": "ATP"})

        assert response.json()["snippets"] == "[1] ATP: energy carrier of the cell"

    @pytest.mark.asyncio
    async def test_empty_query_is_rejected(self, make_test_client, mock_http, provider_calls):
        client, _ = make_test_client(
            BypassIdentityVerifier(), SearchService(mock_http(search_handler))
        )

        response = await client.get("/api/search", params={"q": ""})

        assert response.status_code == 422
        assert provider_calls == []

    @pytest.mark.asyncio
    async def test_provider_failure_is_data_not_error(self, make_test_client, mock_http):
        client, _ = make_test_client(
            BypassIdentityVerifier(),
            SearchService(mock_http(lambda request: httpx.Response(503))),
        )

        response = await client.get("/api/search", params={"q": "ATP"})

        assert response.status_code == 200
        assert response.json()["ok"] is False
        assert response.json()["error"] == "Search API returned 503"

    @pytest.mark.asyncio
    async def test_search_health(self, make_test_client, mock_http):
        client, _ = make_test_client(
            BypassIdentityVerifier(), SearchService(mock_http(search_handler))
        )

        response = await client.get("/api/search/health")

        assert response.json() == {"ok": True, "error": None}


class TestHealthRoute:

    @pytest.mark.asyncio
    async def test_healthy(self, make_test_client, mock_http):
        client, _ = make_test_client(
            BypassIdentityVerifier(), SearchService(mock_http(search_handler))
        )

        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["search"] == "available"
        assert body["auth_mode"] == "bypass"

    @pytest.mark.asyncio
    async def test_degraded_when_search_down(self, make_test_client, mock_http):
        client, _ = make_test_client(
            supabase_verifier(mock_http(supabase_handler)),
            SearchService(mock_http(lambda request: httpx.Response(500))),
        )

        body = (await client.get("/health")).json()

        assert body["status"] == "degraded"
        assert body["search"] == "unavailable"
        assert body["auth_mode"] == "supabase"
