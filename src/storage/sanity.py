"""
Sanity storage backend for Pitch Board.

Implements the ContentClient and WriteClient interfaces against the
Sanity HTTP API.

Sanity HTTP API Documentation: https://www.sanity.io/docs/http-api

=============================================================================
ENDPOINTS
=============================================================================

| Operation | Method | URL                                                        |
|-----------|--------|------------------------------------------------------------|
| query     | GET    | https://<project>.api(cdn).sanity.io/v<ver>/data/query/<ds> |
| mutate    | POST   | https://<project>.api.sanity.io/v<ver>/data/mutate/<ds>     |

Query parameters are passed as ``$name=<JSON value>`` URL arguments.
Mutations always go to the live API; reads may go through the CDN.

=============================================================================
"""

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from src.config import (
    REQUEST_TIMEOUT,
    SANITY_API_VERSION,
    SANITY_DATASET,
    SANITY_PROJECT_ID,
    SANITY_USE_CDN,
    SANITY_WRITE_TOKEN,
)
from src.storage.base import ContentClient, StoreError, WriteClient

logger = logging.getLogger(__name__)


class _SanityHTTP:
    """Connection settings shared by the read and write clients."""

    def __init__(
        self,
        project_id: str = None,
        dataset: str = None,
        api_version: str = None,
        token: str = None,
    ):
        # Use provided values, or fall back to config if None (not empty string)
        self.project_id = project_id if project_id is not None else SANITY_PROJECT_ID
        self.dataset = dataset if dataset is not None else SANITY_DATASET
        self.api_version = api_version if api_version is not None else SANITY_API_VERSION
        self.token = token

    def _validate_config(self) -> None:
        """Validate that required configuration is present."""
        if not self.project_id:
            raise StoreError("SANITY_PROJECT_ID is not configured")
        if not self.dataset:
            raise StoreError("SANITY_DATASET is not configured")

    def _host(self, use_cdn: bool) -> str:
        api = "apicdn" if use_cdn else "api"
        return f"https://{self.project_id}.{api}.sanity.io"

    def _endpoint(self, action: str, use_cdn: bool = False) -> str:
        return f"{self._host(use_cdn)}/v{self.api_version}/data/{action}/{self.dataset}"

    @property
    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


class SanityClient(_SanityHTTP, ContentClient):
    """
    Read client for the Sanity query API.

    Configuration is pulled from environment variables via src.config:
    - SANITY_PROJECT_ID, SANITY_DATASET, SANITY_API_VERSION
    - SANITY_USE_CDN: serve reads from the cached API CDN
    """

    def __init__(
        self,
        project_id: str = None,
        dataset: str = None,
        api_version: str = None,
        token: str = None,
        use_cdn: bool = None,
    ):
        super().__init__(project_id, dataset, api_version, token)
        self.use_cdn = use_cdn if use_cdn is not None else SANITY_USE_CDN

    @property
    def name(self) -> str:
        return "sanity"

    def with_config(self, use_cdn: bool) -> "SanityClient":
        return SanityClient(
            project_id=self.project_id,
            dataset=self.dataset,
            api_version=self.api_version,
            token=self.token,
            use_cdn=use_cdn,
        )

    @staticmethod
    def encode_params(params: Optional[Dict[str, Any]]) -> Dict[str, str]:
        """
        Encode query parameters as Sanity expects them.

        Each parameter becomes ``$name`` with a JSON-encoded value, so
        ``None`` is sent as ``null``.
        """
        return {f"${key}": json.dumps(value) for key, value in (params or {}).items()}

    def fetch(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        self._validate_config()

        request_params = {"query": query.strip()}
        request_params.update(self.encode_params(params))

        try:
            response = requests.get(
                self._endpoint("query", use_cdn=self.use_cdn),
                headers=self._headers,
                params=request_params,
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise StoreError(f"Sanity query failed: {e}") from e
        except ValueError as e:
            raise StoreError(f"Sanity returned invalid JSON: {e}") from e

        logger.debug("query (cdn=%s) params=%s took %sms", self.use_cdn, params, data.get("ms"))
        return data.get("result")


class SanityWriteClient(_SanityHTTP, WriteClient):
    """
    Write client for the Sanity mutations API.

    Requires a token with write access (SANITY_WRITE_TOKEN).
    """

    def __init__(
        self,
        project_id: str = None,
        dataset: str = None,
        api_version: str = None,
        token: str = None,
    ):
        super().__init__(
            project_id,
            dataset,
            api_version,
            token if token is not None else SANITY_WRITE_TOKEN,
        )

    def _validate_config(self) -> None:
        super()._validate_config()
        if not self.token:
            raise StoreError("SANITY_WRITE_TOKEN is not configured")

    def _mutate(self, mutations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Submit mutations as one transaction.

        Returns:
            The per-mutation results, each with ``id`` and ``document``.
        """
        self._validate_config()

        try:
            response = requests.post(
                self._endpoint("mutate"),
                headers=self._headers,
                params={"returnDocuments": "true", "visibility": "sync"},
                json={"mutations": mutations},
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise StoreError(f"Sanity mutation failed: {e}") from e
        except ValueError as e:
            raise StoreError(f"Sanity returned invalid JSON: {e}") from e

        return data.get("results", [])

    @staticmethod
    def _first_document(results: List[Dict[str, Any]], fallback: Dict[str, Any]) -> Dict[str, Any]:
        if results and results[0].get("document"):
            return results[0]["document"]
        if results and results[0].get("id"):
            return {**fallback, "_id": results[0]["id"]}
        return fallback

    def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        results = self._mutate([{"create": document}])
        created = self._first_document(results, document)
        logger.info("created %s %s", document.get("_type"), created.get("_id"))
        return created

    def create_if_not_exists(self, document: Dict[str, Any]) -> Dict[str, Any]:
        if not document.get("_id"):
            raise ValueError("create_if_not_exists requires an explicit _id")
        results = self._mutate([{"createIfNotExists": document}])
        return self._first_document(results, document)

    def increment(self, document_id: str, field: str, amount: int = 1) -> None:
        self._mutate([{
            "patch": {
                "id": document_id,
                "setIfMissing": {field: 0},
                "inc": {field: amount},
            }
        }])
