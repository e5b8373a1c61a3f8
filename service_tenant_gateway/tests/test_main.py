"""
Unit tests for the Tenant API Gateway service.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_tenant_gateway.app.main import TenantGatewayService, create_app
from service_tenant_gateway.app.gateway import TENANT_ID_HEADER, TenantApiGateway, UpdateTenantVariant
from shared.errors import ConfigurationError


class TestTenantGatewayService:
    """Test cases for TenantGatewayService."""

    @pytest.fixture
    def upstream(self):
        """Recorded requests plus the answer the mock tenant API gives."""
        state = {"requests": [], "status_code": 200, "text": '{"id":1}', "exc": None}

        def handler(request: httpx.Request) -> httpx.Response:
            state["requests"].append(request)
            if state["exc"] is not None:
                raise state["exc"]
            return httpx.Response(state["status_code"], text=state["text"])

        state["handler"] = handler
        return state

    @pytest.fixture
    def gateway(self, upstream):
        client = httpx.AsyncClient(transport=httpx.MockTransport(upstream["handler"]))
        return TenantApiGateway(client)

    @pytest.fixture
    def client(self, gateway):
        """Create test client."""
        return TestClient(create_app(gateway=gateway))

    @pytest.fixture
    def command_args(self):
        return {
            "api_url": "https://api.example.test",
            "tenant_id": "tenant-1",
            "token": "token-abc",
        }

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "tenant_gateway"
        assert data["message"] == "Tenant API Gateway"

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "tenant_gateway"
        assert data["status"] == "ok"

    def test_metrics_endpoint(self, client):
        client.get("/")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "http_requests_total" in response.text

    def test_list_commands(self, client):
        response = client.get("/commands")
        assert response.status_code == 200
        data = response.json()
        assert data["commands"] == [
            "get_tenant",
            "put_tenant",
            "query_access_points",
            "query_venues",
            "query_wifi_networks",
        ]
        assert data["aliases"]["query_aps"] == "query_access_points"
        assert data["default_update_tenant_variant"] == "msp_customers"
        variants = {spec.get("variant") for spec in data["specs"] if spec["name"] == "put_tenant"}
        assert variants == {"msp_customers", "tenant"}

    def test_get_tenant_command(self, client, upstream, command_args):
        response = client.post("/commands/get_tenant", json=command_args)

        assert response.status_code == 200
        assert response.json() == {"ok": True, "body": '{"id":1}', "error": None}
        request = upstream["requests"][0]
        assert str(request.url) == "https://api.example.test/tenants/tenant-1"
        assert request.headers["Authorization"] == "Bearer token-abc"

    def test_query_command_forwards_payload(self, client, upstream, command_args):
        payload = {"fields": ["id"], "page": 1, "pageSize": 25}

        response = client.post("/commands/query_venues", json=dict(command_args, payload=payload))

        assert response.json()["ok"] is True
        request = upstream["requests"][0]
        assert request.url.path == "/venues/query"
        assert json.loads(request.content) == payload
        assert request.headers[TENANT_ID_HEADER] == "tenant-1"

    def test_legacy_alias(self, client, upstream, command_args):
        response = client.post("/commands/querywNetworks", json=dict(command_args, payload={}))

        assert response.json()["ok"] is True
        assert upstream["requests"][0].url.path == "/wifiNetworks/query"

    def test_put_tenant_variant(self, client, upstream, command_args):
        response = client.post(
            "/commands/put_tenant",
            json=dict(command_args, payload={"name": "x"}, variant="tenant")
        )

        assert response.json()["ok"] is True
        request = upstream["requests"][0]
        assert request.method == "PUT"
        assert request.url.path == "/tenants/tenant-1"

    def test_remote_error_result(self, client, upstream, command_args):
        upstream["status_code"] = 404
        upstream["text"] = "not found"

        response = client.post("/commands/get_tenant", json=command_args)

        assert response.status_code == 200
        assert response.json() == {"ok": False, "body": None, "error": "HTTP 404: not found"}

    def test_transport_error_result(self, client, upstream, command_args):
        upstream["exc"] = httpx.ConnectError("connection refused")

        response = client.post("/commands/get_tenant", json=command_args)

        assert response.json()["error"] == "Request failed: connection refused"

    def test_region_resolves_base_url(self, client, upstream, command_args):
        args = dict(command_args, region="Asia")
        del args["api_url"]

        client.post("/commands/get_tenant", json=args)

        assert str(upstream["requests"][0].url) == "https://asia.ruckus.cloud/tenants/tenant-1"

    def test_missing_base_url_and_region(self, client, upstream, command_args):
        del command_args["api_url"]

        response = client.post("/commands/get_tenant", json=command_args)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert upstream["requests"] == []

    def test_missing_payload(self, client, upstream, command_args):
        response = client.post("/commands/query_venues", json=command_args)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert upstream["requests"] == []

    def test_unknown_command(self, client, command_args):
        response = client.post("/commands/greet", json=command_args)

        assert response.status_code == 404
        assert response.json()["code"] == "UNKNOWN_COMMAND"

    def test_invalid_request_body(self, client):
        response = client.post("/commands/get_tenant", json={"tenant_id": "tenant-1"})

        assert response.status_code == 422

    def test_request_id_header(self, client, command_args):
        response = client.post(
            "/commands/get_tenant",
            json=command_args,
            headers={"x-request-id": "req-42"}
        )

        assert response.headers["x-request-id"] == "req-42"

    def test_configured_default_variant(self, monkeypatch):
        monkeypatch.setenv("TENANT_GATEWAY_UPDATE_TENANT_VARIANT", "tenant")

        service = TenantGatewayService()

        assert service.gateway.update_tenant_variant == UpdateTenantVariant.TENANT

    def test_invalid_configured_variant(self, monkeypatch):
        monkeypatch.setenv("TENANT_GATEWAY_UPDATE_TENANT_VARIANT", "customers")

        with pytest.raises(ConfigurationError):
            TenantGatewayService()

    def test_default_region_from_config(self, monkeypatch, gateway, upstream):
        monkeypatch.setenv("TENANT_GATEWAY_DEFAULT_REGION", "Europe")
        client = TestClient(create_app(gateway=gateway))

        client.post("/commands/get_tenant", json={"tenant_id": "t-1", "token": "tok"})

        assert upstream["requests"][0].url.host == "eu.ruckus.cloud"

    def test_invalid_configured_region(self, monkeypatch, gateway):
        monkeypatch.setenv("TENANT_GATEWAY_DEFAULT_REGION", "Mars")

        with pytest.raises(ConfigurationError) as exc_info:
            TenantGatewayService(gateway=gateway)
        assert exc_info.value.message == "Invalid region selected"

    def test_configured_timeout_reaches_http_client(self, monkeypatch):
        monkeypatch.setenv("TENANT_GATEWAY_REQUEST_TIMEOUT_SECONDS", "5")

        service = TenantGatewayService()

        assert service.gateway._client.timeout == httpx.Timeout(5.0)

    def test_default_timeout_reaches_http_client(self, monkeypatch):
        monkeypatch.delenv("TENANT_GATEWAY_REQUEST_TIMEOUT_SECONDS", raising=False)

        service = TenantGatewayService()

        assert service.gateway._client.timeout == httpx.Timeout(30.0)

    def test_non_ascii_token_returns_error_result(self, client, upstream, command_args):
        response = client.post("/commands/get_tenant", json=dict(command_args, token="tök"))

        assert response.status_code == 200
        assert response.json()["ok"] is False
        assert response.json()["error"].startswith("Request failed: builder error")
        assert upstream["requests"] == []
