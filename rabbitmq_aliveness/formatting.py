from __future__ import annotations

from rabbitmq_aliveness.checks.results import CheckResult
from rabbitmq_aliveness.config import PLUGIN_LABEL


def format_result(result: CheckResult, label: str = PLUGIN_LABEL) -> str:
    # Schedulers read only the first line of plugin output.
    message = " ".join(result.message.split())
    return f"{label} {result.status.name} - {message}"
