"""
Check client for updatecheck.

Sends one POST to the update checking endpoint and validates the answer.
No retries: a single failure aborts the check for this run.
"""

import platform
import sys
from types import FrameType
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from updatecheck import __version__
from updatecheck.errors import DecodeError, NetworkError, ProtocolError

DEV_URL = "https://update-dev.commonfate.io/check"
PROD_URL = "https://update.commonfate.io/check"

USER_AGENT_PRODUCT = "updatecheck-py"
UNKNOWN_CALLER = "unknown"

# The checking service speaks Go's GOOS/GOARCH vocabulary
_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
}


class CheckRequest(BaseModel):
    """Snapshot of the caller's identity sent to the endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    application: str
    version: str
    architecture: str = Field(alias="arch")
    operating_system: str = Field(alias="os")


class CheckResponse(BaseModel):
    """Server verdict. The message is displayed verbatim, never parsed."""

    # No coercion: "no" or 1 is not a bool. Absent fields take zero values.
    model_config = ConfigDict(populate_by_name=True, strict=True)

    update_required: bool = Field(default=False, alias="updateRequired")
    message: str = ""


def host_os() -> str:
    """Operating system name: linux, darwin, windows, ..."""
    return platform.system().lower() or sys.platform


def host_arch() -> str:
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


def build_request(application: str, version: str) -> CheckRequest:
    """Build a request for the running interpreter's platform."""
    return CheckRequest(
        application=application,
        version=version,
        architecture=host_arch(),
        operating_system=host_os(),
    )


def endpoint_url(prod: bool, config: dict[str, Any] | None = None) -> str:
    """Pick the endpoint: configured override, else prod or dev."""
    override = (config or {}).get("updatecheck", {}).get("url")
    if override:
        return override
    return PROD_URL if prod else DEV_URL


def caller_package(frame: FrameType | None = None) -> str:
    """
    Top-level package of the first frame outside updatecheck.

    Best effort only; returns "unknown" when the stack gives nothing useful.
    """
    frame = frame or sys._getframe(1)
    while frame is not None:
        name = frame.f_globals.get("__name__") or ""
        if name and name.split(".")[0] != "updatecheck":
            return name.split(".")[0]
        frame = frame.f_back
    return UNKNOWN_CALLER


def user_agent(caller: str | None = None) -> str:
    """User-Agent: updatecheck-py/<version> <caller> (<os>)."""
    return f"{USER_AGENT_PRODUCT}/{__version__} {caller or UNKNOWN_CALLER} ({host_os()})"


def check_for_update(
    request: CheckRequest,
    url: str,
    client: httpx.Client | None = None,
    caller: str | None = None,
    timeout: float = 5.0,
) -> CheckResponse:
    """
    POST the request to url and return the parsed response.

    Raises NetworkError, ProtocolError or DecodeError.
    A client passed in is used as-is and left open.
    """
    headers = {
        "Content-Type": "application/json",
        "User-Agent": user_agent(caller),
    }
    body = request.model_dump_json(by_alias=True)

    try:
        if client is not None:
            response = client.post(url, headers=headers, content=body)
        else:
            with httpx.Client(timeout=timeout) as owned:
                response = owned.post(url, headers=headers, content=body)
    except httpx.HTTPError as e:
        raise NetworkError(f"error calling {url}: {e}") from e

    if response.status_code != httpx.codes.OK:
        raise ProtocolError(response.status_code)

    try:
        return CheckResponse.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise DecodeError(f"unexpected response body: {e}") from e
