"""
Login Flow DTOs (Data Transfer Objects)

The immutable request the dispatcher reads and the outcomes it produces.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, Field

from loginflow.app.services.redirects import remove_query_args
from loginflow.app.services.response_builder import CookieInstruction
from loginflow.domain.diagnostics import ErrorSet


# ============================================================================
# Request
# ============================================================================


class LoginRequest(BaseModel):
    """One inbound request to the login endpoint, frozen after parsing"""

    model_config = ConfigDict(frozen=True)

    method: str = "GET"
    url: str
    path: str
    query: Dict[str, str] = Field(default_factory=dict)
    form: Dict[str, str] = Field(default_factory=dict)
    cookies: Dict[str, str] = Field(default_factory=dict)
    is_secure: bool = False
    referer: Optional[str] = None

    @property
    def is_post(self) -> bool:
        return self.method.upper() == "POST"

    def param(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Body value first, query string second"""
        if name in self.form:
            return self.form[name]
        return self.query.get(name, default)

    def url_without(self, *names: str) -> str:
        """Request URI (path and query, no host) with the named query args removed"""
        parts = urlsplit(remove_query_args(self.url, names))
        return urlunsplit(("", "", parts.path, parts.query, ""))


# ============================================================================
# Outcomes
# ============================================================================


@dataclass(frozen=True)
class Redirect:
    """Terminal outcome: send the browser elsewhere"""

    location: str
    status_code: int = 302


@dataclass
class View:
    """Terminal outcome: a screen for the renderer"""

    name: str
    title: str
    errors: ErrorSet = field(default_factory=ErrorSet)
    data: Dict[str, Any] = field(default_factory=dict)
    locale: str = ""
    interim_login: Optional[str] = None


@dataclass
class DispatchResult:
    outcome: Any  # Redirect | View
    cookies: List[CookieInstruction] = field(default_factory=list)

    @property
    def is_redirect(self) -> bool:
        return isinstance(self.outcome, Redirect)
