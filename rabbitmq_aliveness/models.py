from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CheckConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str = Field(..., min_length=1)
    port: int = Field(default=15672, ge=1, le=65535)
    vhost: str = "/"
    username: str = "guest"
    password: str = "guest"
    use_tls: bool = False
    verify_tls: bool = True
    use_env_proxy: bool = True
    proxy_url: Optional[str] = None
    timeout_s: int = Field(default=15, ge=1)

    @property
    def scheme(self) -> str:
        return "https" if self.use_tls else "http"


class AlivenessResponse(BaseModel):
    """Body returned by GET /api/aliveness-test/{vhost}."""

    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = None
    reason: Optional[str] = None
