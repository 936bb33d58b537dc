"""
Vector Index Client.

Talks to a Pinecone serverless index with integrated embedding over its REST
API. The index embeds ``chunk_text`` itself, so records are upserted and
searched as plain text; search results are reranked server-side.
"""

import json
import logging
from typing import Any

import httpx

from garden_shared.clients.base import BaseServiceClient

logger = logging.getLogger(__name__)

CONTROL_PLANE_URL = "https://api.pinecone.io"


class VectorIndexClient(BaseServiceClient):
    """
    Client for one Pinecone index.

    The data-plane host is taken from configuration when given, otherwise it
    is looked up once from the control plane and cached.
    """

    def __init__(
        self,
        api_key: str,
        index_name: str,
        host: str = "",
        api_version: str = "2025-04",
        control_url: str = CONTROL_PLANE_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url=control_url,
            service_name="pinecone",
            timeout=timeout,
            max_retries=max_retries,
            headers={
                "Api-Key": api_key,
                "X-Pinecone-API-Version": api_version,
                "Accept": "application/json",
            },
            transport=transport,
        )
        self.index_name = index_name
        self._host = _normalize_host(host) if host else ""

    async def resolve_host(self) -> str:
        """
        Return the data-plane URL for the index.

        Returns:
            Host URL including scheme, without trailing slash

        Raises:
            httpx.HTTPStatusError: If the index cannot be described
        """
        if self._host:
            return self._host

        response = await self.get(f"/indexes/{self.index_name}")
        response.raise_for_status()
        host = response.json().get("host")
        if not host:
            raise ValueError(f"Index '{self.index_name}' has no data-plane host")

        self._host = _normalize_host(host)
        logger.info("Resolved index %s to %s", self.index_name, self._host)
        return self._host

    async def search_records(
        self,
        namespace: str,
        text: str,
        top_k: int = 5,
        rerank_model: str | None = "bge-reranker-v2-m3",
        rank_fields: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Semantic search with integrated embedding and optional reranking.

        Args:
            namespace: Index namespace to search
            text: Query text (embedded by the index)
            top_k: Hits to retrieve, and to keep after reranking
            rerank_model: Hosted reranker, or None to skip reranking
            rank_fields: Record fields the reranker reads

        Returns:
            List of hits, each ``{"_id", "_score", "fields"}``
        """
        body: dict[str, Any] = {
            "query": {"inputs": {"text": text}, "top_k": top_k},
        }
        if rerank_model:
            body["rerank"] = {
                "model": rerank_model,
                "top_n": top_k,
                "rank_fields": rank_fields or ["chunk_text"],
            }

        host = await self.resolve_host()
        response = await self.post(f"{host}/records/namespaces/{namespace}/search", json=body)
        response.raise_for_status()

        hits = (response.json().get("result") or {}).get("hits") or []
        logger.info("Search returned %d hits", len(hits), extra={"namespace": namespace})
        return hits

    async def upsert_records(self, namespace: str, records: list[dict[str, Any]]) -> int:
        """
        Upsert text records into a namespace.

        Each record needs an ``_id`` and a ``chunk_text`` field; every other
        key is stored as a metadata field.

        Returns:
            Number of records sent
        """
        if not records:
            return 0

        payload = "\n".join(json.dumps(record) for record in records)
        host = await self.resolve_host()
        response = await self.post(
            f"{host}/records/namespaces/{namespace}/upsert",
            content=payload.encode("utf-8"),
            headers={"Content-Type": "application/x-ndjson"},
        )
        response.raise_for_status()

        logger.info("Upserted %d records", len(records), extra={"namespace": namespace})
        return len(records)

    async def describe_index_stats(self) -> dict[str, Any]:
        """Record counts per namespace, dimension and fullness."""
        host = await self.resolve_host()
        response = await self.post(f"{host}/describe_index_stats", json={})
        response.raise_for_status()
        return response.json()


def _normalize_host(host: str) -> str:
    host = host.rstrip("/")
    if not host.startswith(("http://", "https://")):
        host = f"https://{host}"
    return host
