"""
Outbound gateway to the tenant management cloud API.

- specs: one immutable ``RequestSpec`` per endpoint
- models: per-call ``Credentials`` and the ``Success``/``Failure`` result
- regions: region name to API host mapping
- client: ``TenantApiGateway``, the single request/response path
"""

from .client import TenantApiGateway
from .models import Credentials, Failure, FailureKind, GatewayResult, Success
from .regions import Region, resolve_base_url
from .specs import (
    COMMAND_ALIASES,
    COMMAND_NAMES,
    GET_TENANT,
    PUT_TENANT_SPECS,
    QUERY_ACCESS_POINTS,
    QUERY_VENUES,
    QUERY_WIFI_NETWORKS,
    REQUEST_SPECS,
    TENANT_ID_HEADER,
    HttpMethod,
    RequestSpec,
    UpdateTenantVariant,
    get_request_spec,
    parse_variant,
)

__all__ = [
    "TenantApiGateway",
    "Credentials",
    "Failure",
    "FailureKind",
    "GatewayResult",
    "Success",
    "Region",
    "resolve_base_url",
    "COMMAND_ALIASES",
    "COMMAND_NAMES",
    "GET_TENANT",
    "PUT_TENANT_SPECS",
    "QUERY_ACCESS_POINTS",
    "QUERY_VENUES",
    "QUERY_WIFI_NETWORKS",
    "REQUEST_SPECS",
    "TENANT_ID_HEADER",
    "HttpMethod",
    "RequestSpec",
    "UpdateTenantVariant",
    "get_request_spec",
    "parse_variant",
]
