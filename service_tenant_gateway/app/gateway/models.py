"""
Per-call data models for the Tenant API Gateway.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .regions import resolve_base_url

TRANSPORT_FAILURE_PREFIX = "Request failed"


class FailureKind(str, Enum):
    """Why an exchange did not produce a success body."""
    TRANSPORT = "transport"
    REMOTE = "remote"


class Credentials(BaseModel):
    """Connection parameters supplied with every call and never stored."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., min_length=1, description="Tenant API base URL")
    tenant_id: str = Field(..., min_length=1, description="Tenant ID")
    bearer_token: SecretStr = Field(..., description="Bearer token")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def for_region(cls, region: str, tenant_id: str, bearer_token: Union[str, SecretStr]) -> "Credentials":
        """Build credentials whose base URL is the region's cloud host."""
        return cls(base_url=resolve_base_url(region), tenant_id=tenant_id, bearer_token=bearer_token)

    def authorization_header(self) -> str:
        return f"Bearer {self.bearer_token.get_secret_value()}"


@dataclass(frozen=True)
class Success:
    """Upstream answered with a 2xx status; ``body`` is the raw response text."""
    body: str
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Upstream call failed; ``message`` is what the caller is shown."""
    message: str
    kind: FailureKind = FailureKind.REMOTE
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def transport(cls, cause: str) -> "Failure":
        return cls(message=f"{TRANSPORT_FAILURE_PREFIX}: {cause}", kind=FailureKind.TRANSPORT)

    @classmethod
    def remote(cls, status_code: int, body: str) -> "Failure":
        return cls(message=f"HTTP {status_code}: {body}", kind=FailureKind.REMOTE, status_code=status_code)


GatewayResult = Union[Success, Failure]
