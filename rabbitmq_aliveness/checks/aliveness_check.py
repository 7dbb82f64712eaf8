from __future__ import annotations

import logging
import time
from urllib.parse import quote

import requests
import urllib3
from pydantic import ValidationError
from urllib3.exceptions import InsecureRequestWarning

from rabbitmq_aliveness.checks.results import CheckResult, Status
from rabbitmq_aliveness.config import USER_AGENT
from rabbitmq_aliveness.errors import (
    NetworkError,
    ProbeError,
    ProtocolError,
    SemanticError,
)
from rabbitmq_aliveness.models import AlivenessResponse, CheckConfig

logger = logging.getLogger(__name__)

ALIVENESS_PATH = "/api/aliveness-test/"


def build_url(config: CheckConfig) -> str:
    # "/" is the default vhost and must land in the path as %2F.
    vhost = quote(config.vhost, safe="")
    return f"{config.scheme}://{config.host}:{config.port}{ALIVENESS_PATH}{vhost}"


def build_session(config: CheckConfig) -> requests.Session:
    session = requests.Session()
    session.auth = (config.username, config.password)
    session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})

    if config.proxy_url:
        session.trust_env = False
        session.proxies = {"http": config.proxy_url, "https": config.proxy_url}
        logger.debug("Using explicit proxy %s", config.proxy_url)
    elif config.use_env_proxy:
        session.trust_env = True
        logger.debug("Using proxy settings from the environment")
    else:
        session.trust_env = False
        session.proxies = {}
        logger.debug("Proxy disabled")

    if config.use_tls and not config.verify_tls:
        logger.warning("TLS certificate verification disabled for %s", config.host)
        urllib3.disable_warnings(InsecureRequestWarning)
        session.verify = False

    return session


def _fetch(config: CheckConfig, url: str) -> requests.Response:
    session = build_session(config)
    try:
        return session.get(
            url,
            timeout=(config.timeout_s, config.timeout_s),
            allow_redirects=False,
        )
    except requests.Timeout as exc:
        raise NetworkError(
            f"Timed out after {config.timeout_s}s connecting to {config.host}:{config.port}"
        ) from exc
    except requests.ConnectionError as exc:
        raise NetworkError(
            f"Connection error: {exc.__class__.__name__}: {exc}"
        ) from exc
    except requests.RequestException as exc:
        raise NetworkError(
            f"Request failed: {exc.__class__.__name__}: {exc}"
        ) from exc
    finally:
        session.close()


def _decode(body: str) -> AlivenessResponse | None:
    try:
        return AlivenessResponse.model_validate_json(body)
    except ValidationError:
        return None


def classify_response(resp: requests.Response, vhost: str) -> CheckResult:
    """
    Map an aliveness-test response onto a plugin result.
    Raises ProtocolError/SemanticError for every non-OK outcome.
    """
    code = resp.status_code
    body = resp.text or ""

    if code == 400:
        payload = _decode(body)
        if payload is not None and payload.reason is not None:
            raise ProtocolError(payload.reason)
        raise ProtocolError(body or "empty response body")
    if code == 401:
        raise ProtocolError(f"Access refused: {vhost}")
    if code == 404:
        raise ProtocolError(f"Not found: {vhost}")
    if not 200 <= code < 400:
        status_line = f"{code} {resp.reason}" if resp.reason else str(code)
        raise ProtocolError(f"Received {status_line} for vhost: {vhost}")

    payload = _decode(body)
    if payload is None or payload.status != "ok":
        raise SemanticError(body or "empty response body")
    return CheckResult(status=Status.OK, message=f"vhost: {vhost}", status_code=code)


def run_aliveness(config: CheckConfig) -> CheckResult:
    url = build_url(config)
    logger.info("GET %s", url)

    start = time.perf_counter()
    status_code = None
    try:
        resp = _fetch(config, url)
        status_code = resp.status_code
        logger.debug("HTTP %s: %s", status_code, resp.text)
        res = classify_response(resp, config.vhost)
    except ProbeError as e:
        res = CheckResult(status=e.status, message=str(e), status_code=status_code)

    res.latency_ms = int((time.perf_counter() - start) * 1000)
    logger.info("Aliveness %s in %d ms", res.status.name, res.latency_ms)
    return res
