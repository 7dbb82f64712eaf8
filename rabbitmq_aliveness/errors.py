from __future__ import annotations

from rabbitmq_aliveness.checks.results import Status


class ProbeError(RuntimeError):
    """Terminal failure of a single aliveness run, tagged with its plugin status."""

    status: Status = Status.UNKNOWN


class ConfigError(ProbeError):
    status = Status.UNKNOWN


class NetworkError(ProbeError):
    status = Status.CRITICAL


class ProtocolError(ProbeError):
    status = Status.CRITICAL


class SemanticError(ProbeError):
    status = Status.CRITICAL
