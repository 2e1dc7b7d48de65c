"""Maven Central search client used to list published versions."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Set

import requests

from constants import Constants
from common import http_client
from common.errors import RegistryError
from common.logging_utils import extra_context, is_debug_enabled, Timer, safe_url


class MavenCentralClient:
    """Query the Maven Central Solr search API for a coordinate's versions.

    The default core returns one doc per artifact carrying ``latestVersion``;
    with ``core="gav"`` each doc is a single release carrying ``v``. Both
    fields are collected so either core works.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        rows: Optional[int] = None,
        core: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.url = url or Constants.REGISTRY_URL_MAVEN
        self.rows = rows if rows is not None else Constants.REGISTRY_ROWS
        self.core = core if core is not None else Constants.REGISTRY_CORE
        self.timeout = timeout if timeout is not None else Constants.REQUEST_TIMEOUT
        self.session = session
        self.logger = logger or logging.getLogger(__name__)

    def build_params(self, group: str, artifact: str) -> Dict[str, Any]:
        """Search parameters for one coordinate."""
        params: Dict[str, Any] = {
            "q": f'g:"{group}" AND a:"{artifact}"',
            "rows": self.rows,
            "wt": "json",
        }
        if self.core:
            params["core"] = self.core
        return params

    def lookup_versions(self, group: str, artifact: str) -> Set[str]:
        """Return the set of version strings the registry reports.

        Raises:
            RegistryError: transport failure, non-200 status or malformed JSON.
        """
        headers = {"Accept": "application/json"}
        with Timer() as timer:
            res = http_client.safe_get(
                self.url,
                context="maven",
                fatal=False,
                timeout=self.timeout,
                session=self.session,
                params=self.build_params(group, artifact),
                headers=headers,
            )

        if res.status_code != 200:
            self.logger.warning(
                "HTTP non-2xx handled",
                extra=extra_context(
                    event="http_response",
                    outcome="handled_non_2xx",
                    status_code=res.status_code,
                    duration_ms=timer.duration_ms(),
                    target=safe_url(self.url),
                    package_manager="maven"
                )
            )
            raise RegistryError(f"maven search returned HTTP {res.status_code}")

        try:
            payload = json.loads(res.text)
        except json.JSONDecodeError as exc:
            raise RegistryError(f"maven search returned invalid JSON: {exc}") from exc

        docs = _docs(payload)
        versions: Set[str] = set()
        for doc in docs:
            if not isinstance(doc, dict):
                continue
            for field in ("latestVersion", "v"):
                value = doc.get(field)
                if isinstance(value, str) and value:
                    versions.add(value)

        if is_debug_enabled(self.logger):
            self.logger.debug(
                "Registry versions for %s:%s: %s",
                group, artifact, sorted(versions),
                extra=extra_context(
                    event="decision",
                    component="maven_central",
                    action="lookup_versions",
                    count=len(versions),
                    duration_ms=timer.duration_ms(),
                )
            )
        return versions


def _docs(payload: Any) -> list:
    """Extract ``response.docs`` or raise RegistryError."""
    if not isinstance(payload, dict):
        raise RegistryError("maven search payload is not an object")
    response = payload.get("response")
    if not isinstance(response, dict):
        raise RegistryError("maven search payload has no 'response' object")
    docs = response.get("docs")
    if not isinstance(docs, list):
        raise RegistryError("maven search payload has no 'docs' list")
    return docs
