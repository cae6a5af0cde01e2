"""Tests for the business directory HTTP API."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.rate_limit import RATE_LIMIT_MESSAGE, limiter
from src.config import Settings
from src.main import create_app
from src.modules.businesses import BusinessService
from src.modules.businesses.routes import set_business_service

ACME = {
    "name": "Acme",
    "description": "Widgets",
    "email": "a@a.com",
    "category": "product",
}


@pytest.fixture(autouse=True)
def reset_rate_limits() -> Iterator[None]:
    """Start every test with empty rate limit counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Location of an isolated directory file."""
    return tmp_path / "data" / "businesses.json"


@pytest.fixture
def client(data_file: Path) -> Iterator[TestClient]:
    """Create a test client for an app backed by a temporary file."""
    settings = Settings(data_file=data_file)
    with TestClient(create_app(settings)) as test_client:
        yield test_client


class TestListBusinesses:
    """Tests for GET /businesses."""

    def test_empty_store_lists_nothing(self, client: TestClient) -> None:
        """Should return an empty array for a fresh store."""
        response = client.get("/businesses")

        assert response.status_code == 200
        assert response.json() == []

    def test_directory_scenario(self, client: TestClient) -> None:
        """Register a product, then browse each listing."""
        assert client.get("/businesses").json() == []

        response = client.post("/businesses", json=ACME)
        assert response.status_code == 201
        created = response.json()
        assert created["id"]
        assert created["createdAt"]
        assert created["phone"] == ""
        assert created["address"] == ""
        assert created["category"] == "product"

        products = client.get("/businesses", params={"type": "products"}).json()
        assert products == [created]

        services = client.get("/businesses", params={"type": "services"}).json()
        assert services == []

        assert client.get("/businesses").json() == [created]

    def test_listing_preserves_registration_order(self, client: TestClient) -> None:
        """Should list in the order businesses were registered."""
        names = ["First", "Second", "Third"]
        for name in names:
            client.post("/businesses", json={**ACME, "name": name})

        listed = client.get("/businesses").json()
        assert [b["name"] for b in listed] == names

    def test_empty_type_lists_everything(self, client: TestClient) -> None:
        """An empty type parameter means no filter."""
        client.post("/businesses", json=ACME)
        response = client.get("/businesses?type=")

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_unknown_type_not_allowed(self, client: TestClient) -> None:
        """Unknown listing types fall through to 405."""
        response = client.get("/businesses", params={"type": "widgets"})

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}

    def test_corrupt_store_lists_nothing(
        self, client: TestClient, data_file: Path
    ) -> None:
        """An unreadable store should read as empty instead of failing."""
        data_file.parent.mkdir(parents=True, exist_ok=True)
        data_file.write_text("[{oops", encoding="utf-8")

        response = client.get("/businesses")

        assert response.status_code == 200
        assert response.json() == []


class TestRegisterBusiness:
    """Tests for POST /businesses."""

    def test_register_persists_record(
        self, client: TestClient, data_file: Path
    ) -> None:
        """The created record should be written to the data file."""
        response = client.post(
            "/businesses",
            json={**ACME, "phone": "555-0100", "address": "1 Main St"},
        )
        created = response.json()

        stored = json.loads(data_file.read_text(encoding="utf-8"))
        assert stored == [created]
        assert stored[0]["phone"] == "555-0100"

    def test_invalid_category(self, client: TestClient, data_file: Path) -> None:
        """Should reject unknown categories and store nothing."""
        response = client.post(
            "/businesses", json={**ACME, "category": "subscription"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Category must be product or service"}
        assert client.get("/businesses").json() == []

    @pytest.mark.parametrize("field", ["name", "description", "email", "category"])
    def test_missing_field(self, client: TestClient, field: str) -> None:
        """Should reject registrations without a required field."""
        payload = {k: v for k, v in ACME.items() if k != field}
        response = client.post("/businesses", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_empty_name(self, client: TestClient) -> None:
        """An empty name is treated as missing."""
        response = client.post("/businesses", json={**ACME, "name": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}
        assert client.get("/businesses").json() == []

    def test_no_body(self, client: TestClient) -> None:
        """A request without a body is missing every field."""
        response = client.post("/businesses")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_malformed_json(self, client: TestClient) -> None:
        """An unparseable body is a bad request."""
        response = client.post(
            "/businesses",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_non_string_field(self, client: TestClient) -> None:
        """Field values must be strings."""
        response = client.post("/businesses", json={**ACME, "name": 42})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_persistence_failure(self, tmp_path: Path) -> None:
        """A failed write should answer 500 with the error envelope."""
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        settings = Settings(data_file=blocker / "businesses.json")

        with TestClient(create_app(settings)) as client:
            response = client.post("/businesses", json=ACME)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save business"}

    def test_rate_limited(self, data_file: Path) -> None:
        """Registrations beyond the configured rate should answer 429."""
        settings = Settings(data_file=data_file, rate_limit_requests=2)

        with TestClient(create_app(settings)) as client:
            statuses = [
                client.post("/businesses", json=ACME).status_code for _ in range(4)
            ]
            response = client.post("/businesses", json=ACME)

        assert statuses == [201, 201, 429, 429]
        assert response.json() == {"error": RATE_LIMIT_MESSAGE}

    def test_array_body(self, client: TestClient) -> None:
        """A JSON body that is not an object is a bad request."""
        response = client.post("/businesses", json=[ACME])

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}
        assert client.get("/businesses").json() == []


class TestProtocol:
    """Tests for CORS, preflight and unsupported requests."""

    def test_cors_headers_on_responses(self, client: TestClient) -> None:
        """Every response should carry the CORS headers."""
        response = client.get("/businesses")

        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type"

    def test_cors_headers_on_errors(self, client: TestClient) -> None:
        """Error responses should carry the CORS headers too."""
        response = client.post("/businesses", json={})

        assert response.status_code == 400
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("path", ["/businesses", "/anything/else"])
    def test_options_preflight(self, client: TestClient, path: str) -> None:
        """OPTIONS should answer 200 with an empty body on any path."""
        response = client.options(
            path,
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
    def test_unsupported_method(self, client: TestClient, method: str) -> None:
        """Methods other than GET and POST are not allowed."""
        response = client.request(method, "/businesses", json=ACME)

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}

    def test_unknown_path(self, client: TestClient) -> None:
        """Paths the directory does not serve are not allowed either."""
        response = client.get("/unknown")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}

    def test_api_prefix(self, data_file: Path) -> None:
        """The resource can be mounted under a prefix."""
        settings = Settings(data_file=data_file, api_prefix="/api")

        with TestClient(create_app(settings)) as client:
            response = client.post("/api/businesses", json=ACME)
            assert response.status_code == 201
            assert len(client.get("/api/businesses").json()) == 1
            assert client.get("/businesses").status_code == 405

    def test_unhandled_error(
        self, data_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Unexpected failures answer a generic 500 and log the trace id."""
        mock_logger = MagicMock()
        monkeypatch.setattr("src.api.errors.logger", mock_logger)
        service = AsyncMock(spec=BusinessService)
        service.list_all.side_effect = RuntimeError("disk on fire")
        app = create_app(Settings(data_file=data_file))

        with TestClient(app, raise_server_exceptions=False) as client:
            set_business_service(service)
            response = client.get("/businesses")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == "*"
        mock_logger.exception.assert_called_once()
        kwargs = mock_logger.exception.call_args.kwargs
        assert kwargs["error_type"] == "RuntimeError"
        assert "trace_id" in kwargs
