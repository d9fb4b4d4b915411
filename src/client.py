"""Remote config service factory for schemadeck.

The cluster endpoint comes from config.json but can be overridden from the
environment, and the optional API token only ever lives in the environment.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from adapters.http_config_service import HttpConfigService
from core.models import ClusterRef


def build_cluster_ref(default_alias: str, default_endpoint: str) -> ClusterRef:
    """Resolve the target cluster, letting CLUSTER_ALIAS/CLUSTER_ENDPOINT win."""

    load_dotenv()

    alias = os.getenv("CLUSTER_ALIAS") or default_alias
    endpoint = os.getenv("CLUSTER_ENDPOINT") or default_endpoint

    # Fail fast on a missing endpoint instead of sending relative requests.
    if not endpoint:
        raise RuntimeError("Missing cluster endpoint (config.json cluster.endpoint or CLUSTER_ENDPOINT)")

    return ClusterRef(alias=alias or endpoint, endpoint=endpoint.rstrip("/"))


def build_service(timeout_seconds: float) -> HttpConfigService:
    """Create the HTTP adapter; CLUSTER_AUTH_TOKEN is read via python-dotenv."""

    load_dotenv()

    logging.getLogger(__name__).info("Initializing cluster config client")

    return HttpConfigService(
        timeout_seconds=timeout_seconds,
        auth_token=os.getenv("CLUSTER_AUTH_TOKEN") or None,
    )
