"""
Async gateway to the third-party tenant management API.
"""

import json
import time
from typing import Any, Dict, Optional

import httpx

from shared.errors import ValidationError
from shared.logging import get_logger
from shared.metrics import MetricsCollector

from .models import Credentials, Failure, GatewayResult, Success
from .specs import (
    GET_TENANT,
    QUERY_ACCESS_POINTS,
    QUERY_VENUES,
    QUERY_WIFI_NETWORKS,
    RequestSpec,
    UpdateTenantVariant,
    parse_variant,
    put_tenant_spec,
)

DEFAULT_TIMEOUT_SECONDS = 30.0
JSON_CONTENT_TYPE = "application/json"


class TenantApiGateway:
    """Sends one request per call and reduces the answer to a ``GatewayResult``.

    The wrapped ``httpx.AsyncClient`` is only a connection pool: credentials,
    headers and bodies are built per request, so concurrent calls for
    different tenants never share state.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        update_tenant_variant: UpdateTenantVariant = UpdateTenantVariant.MSP_CUSTOMERS,
        logger=None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self.update_tenant_variant = parse_variant(update_tenant_variant)
        self.logger = logger or get_logger("tenant_gateway.client")
        self.metrics = metrics

    async def close(self) -> None:
        """Close the underlying HTTP client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "TenantApiGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def build_request(self, spec: RequestSpec, creds: Credentials, body: Any = None) -> httpx.Request:
        """Build the outbound request for ``spec`` without sending it."""
        headers: Dict[str, str] = {"Authorization": creds.authorization_header()}
        if spec.is_read:
            headers["Accept"] = JSON_CONTENT_TYPE

        content = None
        if spec.requires_body:
            if body is None:
                raise ValidationError(
                    f"{spec.name} requires a JSON payload",
                    details={"operation": spec.name}
                )
            headers["Content-Type"] = JSON_CONTENT_TYPE
            try:
                content = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise ValidationError(
                    f"{spec.name} payload is not JSON serializable",
                    details={"operation": spec.name, "error": str(exc)}
                )

        headers.update(spec.resolve_extra_headers(creds))
        return self._client.build_request(
            spec.method.value,
            spec.resolve_url(creds),
            headers=headers,
            content=content,
        )

    async def invoke(self, spec: RequestSpec, creds: Credentials, body: Any = None) -> GatewayResult:
        """Issue the request described by ``spec`` exactly once.

        Transport problems and non-2xx answers come back as ``Failure``;
        only caller mistakes (missing or unserializable payload) raise.
        """
        start_time = time.perf_counter()
        try:
            request = self.build_request(spec, creds, body)
            self.logger.debug(
                "Tenant API request",
                operation=spec.name,
                method=request.method,
                url=str(request.url),
                tenant_id=creds.tenant_id,
                payload=body if spec.requires_body else None,
            )
            response = await self._client.send(request)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            result = Failure.transport(str(exc) or exc.__class__.__name__)
            self._record(spec, result, start_time, error=str(exc))
            return result
        except UnicodeEncodeError:
            # The offending character may be part of the token, so it is not echoed.
            result = Failure.transport("builder error: header values must be ASCII")
            self._record(spec, result, start_time, error="UnicodeEncodeError")
            return result

        body_text = response.text
        if response.is_success:
            result = Success(body=body_text, status_code=response.status_code)
        else:
            result = Failure.remote(response.status_code, body_text)
        self._record(spec, result, start_time, status_code=response.status_code)
        return result

    def _record(self, spec: RequestSpec, result: GatewayResult, start_time: float, **fields) -> None:
        duration = time.perf_counter() - start_time
        outcome = "success" if result.ok else result.kind.value
        log = self.logger.info if result.ok else self.logger.warning
        log(
            "Tenant API response",
            operation=spec.name,
            outcome=outcome,
            duration_ms=round(duration * 1000, 2),
            **fields
        )
        if self.metrics is not None:
            self.metrics.record_upstream_call(spec.name, outcome, duration)

    async def get_tenant(self, creds: Credentials) -> GatewayResult:
        return await self.invoke(GET_TENANT, creds)

    async def put_tenant(
        self,
        creds: Credentials,
        tenant_data: Any,
        variant: Optional[UpdateTenantVariant] = None,
    ) -> GatewayResult:
        """Update a tenant using ``variant`` or the gateway's configured default."""
        spec = put_tenant_spec(variant or self.update_tenant_variant)
        return await self.invoke(spec, creds, tenant_data)

    async def query_venues(self, creds: Credentials, query_data: Any) -> GatewayResult:
        return await self.invoke(QUERY_VENUES, creds, query_data)

    async def query_wifi_networks(self, creds: Credentials, query_data: Any) -> GatewayResult:
        return await self.invoke(QUERY_WIFI_NETWORKS, creds, query_data)

    async def query_access_points(self, creds: Credentials, query_data: Any) -> GatewayResult:
        return await self.invoke(QUERY_ACCESS_POINTS, creds, query_data)
