"""
Tenant API Gateway service.

Exposes each tenant API operation as an invokable command so the desktop UI
(or any other host) can call ``POST /commands/<name>`` and receive the same
``Result<String, String>`` shape it gets from the native command bridge.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, SecretStr

from shared.base_service import BaseService
from shared.errors import ConfigurationError, ValidationError
from shared.logging import set_call_context

from service_tenant_gateway.app.gateway import (
    COMMAND_ALIASES,
    COMMAND_NAMES,
    PUT_TENANT_SPECS,
    REQUEST_SPECS,
    Credentials,
    Region,
    TenantApiGateway,
    UpdateTenantVariant,
    get_request_spec,
    parse_variant,
    resolve_base_url,
)

SERVICE_NAME = "tenant_gateway"
SERVICE_PORT = 8020


class CommandRequest(BaseModel):
    """Arguments of one command invocation."""
    api_url: Optional[str] = Field(None, description="Tenant API base URL")
    region: Optional[Region] = Field(None, description="Region used when api_url is omitted")
    tenant_id: str = Field(..., min_length=1, description="Tenant ID")
    token: SecretStr = Field(..., description="Bearer token")
    payload: Optional[Any] = Field(None, description="JSON body forwarded verbatim")
    variant: Optional[UpdateTenantVariant] = Field(None, description="put_tenant endpoint variant")


class CommandResponse(BaseModel):
    """Either the raw upstream body or the error message."""
    ok: bool
    body: Optional[str] = None
    error: Optional[str] = None


class TenantGatewayService(BaseService):
    """Tenant API Gateway service implementation."""

    def __init__(self, gateway: Optional[TenantApiGateway] = None):
        super().__init__(SERVICE_NAME, SERVICE_PORT)

        try:
            default_variant = parse_variant(self.config.update_tenant_variant)
        except ValidationError as exc:
            raise ConfigurationError(exc.message, details=exc.details)

        if self.config.default_region is not None:
            try:
                resolve_base_url(self.config.default_region)
            except ValidationError as exc:
                raise ConfigurationError(exc.message, details=exc.details)

        self.gateway = gateway or TenantApiGateway(
            timeout=self.config.request_timeout_seconds,
            update_tenant_variant=default_variant,
            metrics=self.metrics,
        )

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.gateway.close()

        self._setup_gateway_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    def _credentials(self, command_request: CommandRequest) -> Credentials:
        """Build per-call credentials; the token is not kept beyond this call."""
        if command_request.api_url:
            return Credentials(
                base_url=command_request.api_url,
                tenant_id=command_request.tenant_id,
                bearer_token=command_request.token,
            )

        region = command_request.region or self.config.default_region
        if region is None:
            raise ValidationError(
                "Either api_url or region is required",
                details={"tenant_id": command_request.tenant_id}
            )
        return Credentials.for_region(region, command_request.tenant_id, command_request.token)

    def _setup_gateway_routes(self):
        """Set up command routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": SERVICE_NAME,
                "message": "Tenant API Gateway",
                "version": "1.0.0"
            }

        @self.app.get("/commands")
        async def list_commands():
            """List every invokable command and the request it issues."""
            specs = [spec.describe() for spec in REQUEST_SPECS.values()]
            specs.extend(
                dict(spec.describe(), variant=variant.value)
                for variant, spec in PUT_TENANT_SPECS.items()
            )
            return {
                "commands": list(COMMAND_NAMES),
                "aliases": dict(COMMAND_ALIASES),
                "default_update_tenant_variant": self.gateway.update_tenant_variant.value,
                "specs": specs,
            }

        @self.app.post("/commands/{command}", response_model=CommandResponse)
        async def invoke_command(command: str, command_request: CommandRequest):
            """Run one tenant API operation and return its result."""
            spec = get_request_spec(command, command_request.variant or self.gateway.update_tenant_variant)
            creds = self._credentials(command_request)
            set_call_context(tenant_id=creds.tenant_id, operation=spec.name)

            result = await self.gateway.invoke(spec, creds, command_request.payload)
            if result.ok:
                return CommandResponse(ok=True, body=result.body)
            return CommandResponse(ok=False, error=result.message)


def create_app(gateway: Optional[TenantApiGateway] = None):
    """Create FastAPI application."""
    service = TenantGatewayService(gateway=gateway)
    return service.app


if __name__ == "__main__":
    service = TenantGatewayService()
    service.run()
