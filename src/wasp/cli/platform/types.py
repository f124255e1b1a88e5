"""Data types for Platform API contracts."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_ACCOUNT, PLATFORM_API_URL


class ClientContext(BaseModel):
    """API endpoint and account label selected on the command line."""

    model_config = ConfigDict(frozen=True)

    api_url: str = PLATFORM_API_URL
    account: str = DEFAULT_ACCOUNT


class CredentialEntry(BaseModel):
    """Stored login token and the instant it stops being valid."""

    access_token: str
    expires_at: datetime


# Longest token lifetime accepted from the server, in seconds (100 years)
MAX_TOKEN_TTL = 100 * 365 * 24 * 60 * 60


class LoginResponse(BaseModel):
    """Response from POST /login."""

    access_token: str
    expires_in: int = Field(ge=0, le=MAX_TOKEN_TTL)


class CompileResponse(BaseModel):
    """Response from POST /compile."""

    model_config = ConfigDict(populate_by_name=True)

    module_id: str = Field(alias="ok")


class ErrorBody(BaseModel):
    """Structured error body returned by the API."""

    error: str


class HostConfiguration(BaseModel):
    """Module, entry function and environment for a host.

    ``module`` may be a remote module id or a local path still waiting to be
    uploaded. Environment values are JSON strings, or None to unset.
    """

    module: str | None = None
    function: str | None = None
    env: dict[str, str | None] = Field(default_factory=dict)


class HostUpdatePayload(BaseModel):
    """Body of POST /hosts/{host}.

    Serialize with :meth:`to_wire` so absent fields are left out instead of
    being sent as null.
    """

    module: str | None = None
    function: str | None = None
    env: dict[str, str | None] = Field(default_factory=dict)

    def to_wire(self) -> dict:
        data = self.model_dump(exclude_none=True, exclude={"env"})
        if self.env:
            data["env"] = dict(self.env)
        return data


class HostCreatePayload(HostUpdatePayload):
    """Body of POST /hosts."""

    host: str
    customer_id: str

    def to_wire(self) -> dict:
        return {"host": self.host, "customer_id": self.customer_id, **super().to_wire()}


class RunConfig(BaseModel):
    """Everything the module runtime needs to serve a module locally."""

    module: Path
    function: str = "run"
    port: int = 5000
    cdn_directory: Path | None = None
    protected_cdn_directory: Path | None = None
    kvs_directory: Path = Path(".db")
    env: dict[str, str] = Field(default_factory=dict)
