"""
Request specs for every tenant API operation.

Each logical operation is described once as a ``RequestSpec``; the gateway
turns a spec plus per-call credentials into exactly one HTTP exchange.
Adding an endpoint means adding a row here, not another request function.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from shared.errors import UnknownCommandError, ValidationError

from .models import Credentials

TENANT_ID_HEADER = "x-rks-tenantid"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"


class HeaderSource(str, Enum):
    """Where the value of an extra header comes from."""
    TENANT_ID = "tenant_id"


class UpdateTenantVariant(str, Enum):
    """The two known shapes of the tenant update call."""
    MSP_CUSTOMERS = "msp_customers"
    TENANT = "tenant"


@dataclass(frozen=True)
class RequestSpec:
    """Immutable description of one tenant API endpoint."""
    name: str
    method: HttpMethod
    path_template: str
    requires_body: bool = False
    extra_headers: Mapping[str, HeaderSource] = field(default_factory=dict)

    @property
    def is_read(self) -> bool:
        return self.method == HttpMethod.GET

    def resolve_url(self, creds: Credentials) -> str:
        """Substitute the base URL and path parameters into the template."""
        return self.path_template.format(base=creds.base_url, tenant_id=creds.tenant_id)

    def resolve_extra_headers(self, creds: Credentials) -> Dict[str, str]:
        sources = {HeaderSource.TENANT_ID: creds.tenant_id}
        return {name: sources[source] for name, source in self.extra_headers.items()}

    def describe(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "method": self.method.value,
            "path_template": self.path_template,
            "requires_body": self.requires_body,
            "extra_headers": sorted(self.extra_headers),
        }


_TENANT_SCOPED = MappingProxyType({TENANT_ID_HEADER: HeaderSource.TENANT_ID})

GET_TENANT = RequestSpec(
    name="get_tenant",
    method=HttpMethod.GET,
    path_template="{base}/tenants/{tenant_id}",
)

# Bulk customers endpoint; the tenant payload is sent flat, without a wrapper.
PUT_TENANT_MSP_CUSTOMERS = RequestSpec(
    name="put_tenant",
    method=HttpMethod.POST,
    path_template="{base}/mspCustomers",
    requires_body=True,
)

PUT_TENANT_TENANT = RequestSpec(
    name="put_tenant",
    method=HttpMethod.PUT,
    path_template="{base}/tenants/{tenant_id}",
    requires_body=True,
)

QUERY_VENUES = RequestSpec(
    name="query_venues",
    method=HttpMethod.POST,
    path_template="{base}/venues/query",
    requires_body=True,
    extra_headers=_TENANT_SCOPED,
)

QUERY_WIFI_NETWORKS = RequestSpec(
    name="query_wifi_networks",
    method=HttpMethod.POST,
    path_template="{base}/wifiNetworks/query",
    requires_body=True,
    extra_headers=_TENANT_SCOPED,
)

QUERY_ACCESS_POINTS = RequestSpec(
    name="query_access_points",
    method=HttpMethod.POST,
    path_template="{base}/venues/aps/query",
    requires_body=True,
    extra_headers=_TENANT_SCOPED,
)

PUT_TENANT_SPECS = MappingProxyType({
    UpdateTenantVariant.MSP_CUSTOMERS: PUT_TENANT_MSP_CUSTOMERS,
    UpdateTenantVariant.TENANT: PUT_TENANT_TENANT,
})

REQUEST_SPECS = MappingProxyType({
    spec.name: spec
    for spec in (GET_TENANT, QUERY_VENUES, QUERY_WIFI_NETWORKS, QUERY_ACCESS_POINTS)
})

# Command names the desktop UI has historically invoked.
COMMAND_ALIASES = MappingProxyType({
    "querywNetworks": "query_wifi_networks",
    "query_aps": "query_access_points",
})

COMMAND_NAMES = tuple(sorted(set(REQUEST_SPECS) | {"put_tenant"}))


def parse_variant(value) -> UpdateTenantVariant:
    try:
        return UpdateTenantVariant(value)
    except ValueError:
        raise ValidationError(
            f"Unknown update tenant variant: {value}",
            details={"allowed": [v.value for v in UpdateTenantVariant]}
        )


def put_tenant_spec(variant: UpdateTenantVariant) -> RequestSpec:
    return PUT_TENANT_SPECS[parse_variant(variant)]


def get_request_spec(command: str, variant: Optional[UpdateTenantVariant] = None) -> RequestSpec:
    """Look up the spec for a command name, following legacy aliases."""
    name = COMMAND_ALIASES.get(command, command)
    if name == "put_tenant":
        return put_tenant_spec(variant or UpdateTenantVariant.MSP_CUSTOMERS)
    try:
        return REQUEST_SPECS[name]
    except KeyError:
        raise UnknownCommandError(command, details={"available": list(COMMAND_NAMES)})
