"""Exceptions raised inside the update check path."""


class UpdateCheckError(Exception):
    """Base class for every updatecheck failure."""


class ConfigDirUnavailable(UpdateCheckError):
    """The per-user config directory cannot be resolved or created."""


class LedgerReadError(UpdateCheckError):
    """The ledger file exists but cannot be read or parsed."""


class LedgerWriteError(UpdateCheckError):
    """The ledger file cannot be written."""


class NetworkError(UpdateCheckError):
    """The transport failed before a response arrived."""


class ProtocolError(UpdateCheckError):
    """The endpoint answered with a status other than 200."""

    def __init__(self, status_code: int):
        super().__init__(f"got invalid response from update checker API: {status_code}")
        self.status_code = status_code


class DecodeError(UpdateCheckError):
    """The response body is not the expected JSON shape."""
