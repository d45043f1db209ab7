"""
S3 Vectors index for remote retrieval.

Drives an Amazon S3 Vectors index (the remote "collection") as an alternative
backend with the same capabilities as the local store.

Availability is decided once at construction by probing the vector bucket and
is never re-probed. Every service failure (network, protocol, serialization,
timeout) is caught at the call boundary, logged, and converted into an empty
result, a no-op or zero. Callers cannot tell "no matches" from "unreachable"
without the logs.

Metadata keys:
- Non-filterable: text
- Filterable: every other metadata key (str, int, float, bool; other shapes stringified)

Dependencies: boto3, botocore
System role: Remote vector backend (S3 Vectors)
"""

import hashlib
import logging
import threading
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from navigator.boundary.llm.embedding_provider import EmbeddingProvider
from navigator.boundary.vdb.base import VectorBackend
from navigator.core.document_processing.tasks.chunking_task import ChunkingTask
from navigator.models.document import Fragment, ScoredFragment

logger = logging.getLogger(__name__)

BACKEND_ERRORS = (BotoCoreError, ClientError)
SCALAR_TYPES = (str, bool, int, float)

# put_vectors and list_vectors page limits
PUT_BATCH_SIZE = 500
LIST_PAGE_SIZE = 1000


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class S3VectorIndex(VectorBackend):
    """
    S3 Vectors backend.

    Point keys are content-derived (text, source, filename and position in the
    document), so re-ingesting the same source overwrites its points rather
    than duplicating them.
    """

    name = "s3vectors"
    TEXT_KEY = "text"

    def __init__(
        self,
        vectors_bucket: str,
        index_name: str = "science-curriculum-g3-g6",
        region: str = "ap-southeast-2",
        dimension: int = 1024,
        chunker: ChunkingTask | None = None,
        connect_timeout: int = 5,
        read_timeout: int = 30,
        max_attempts: int = 3,
        client: Any | None = None,
    ) -> None:
        """
        Create the S3 Vectors client and probe the vector bucket.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            dimension: Vector dimension used when creating the index
            chunker: Chunking task for ingest()
            connect_timeout: Connect timeout in seconds
            read_timeout: Read timeout in seconds
            max_attempts: botocore retry attempts per call
            client: Preconfigured s3vectors client (tests)
        """
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._dimension = dimension
        self._chunker = chunker or ChunkingTask()
        self._init_lock = threading.Lock()
        self._available = False
        self._client = client

        try:
            if self._client is None:
                self._client = boto3.client(
                    "s3vectors",
                    region_name=region,
                    config=Config(
                        connect_timeout=connect_timeout,
                        read_timeout=read_timeout,
                        retries={"max_attempts": max_attempts, "mode": "standard"},
                    ),
                )
            self._client.get_vector_bucket(vectorBucketName=vectors_bucket)
            self._available = True
            logger.info(f"{__name__}:__init__ - Connected to S3 Vectors bucket {vectors_bucket}")
        except BACKEND_ERRORS as e:
            logger.warning(
                f"{__name__}:__init__ - Could not connect to S3 Vectors: {e}. "
                "Using in-memory RAG system."
            )

    @property
    def available(self) -> bool:
        """Whether the bucket probe succeeded at construction."""
        return self._available

    @property
    def index_name(self) -> str:
        return self._index_name

    def initialize_collection(
        self,
        index_name: str | None = None,
        vector_size: int | None = None,
    ) -> None:
        """
        Create the index if it does not exist.

        Only a NotFoundException from get_index counts as "absent". Any other
        failure is logged and no create is attempted.

        Args:
            index_name: Index to create (defaults to the configured index)
            vector_size: Vector dimension (defaults to the configured dimension)
        """
        if not self._available:
            logger.info(f"{__name__}:initialize_collection - S3 Vectors not available, skipping")
            return

        name = index_name or self._index_name
        size = vector_size or self._dimension

        with self._init_lock:
            try:
                self._client.get_index(vectorBucketName=self._vectors_bucket, indexName=name)
                logger.info(f"{__name__}:initialize_collection - Collection already exists: {name}")
                return
            except ClientError as e:
                if _error_code(e) != "NotFoundException":
                    logger.error(
                        f"{__name__}:initialize_collection - Could not check collection {name}: {e}"
                    )
                    return
            except BotoCoreError as e:
                logger.error(
                    f"{__name__}:initialize_collection - Could not check collection {name}: {e}"
                )
                return

            logger.info(f"{__name__}:initialize_collection - Creating collection: {name}")
            try:
                self._client.create_index(
                    vectorBucketName=self._vectors_bucket,
                    indexName=name,
                    dataType="float32",
                    dimension=size,
                    distanceMetric="cosine",
                    metadataConfiguration={"nonFilterableMetadataKeys": [self.TEXT_KEY]},
                )
                logger.info(f"{__name__}:initialize_collection - Collection created: {name}")
            except ClientError as e:
                if _error_code(e) == "ConflictException":
                    logger.info(f"{__name__}:initialize_collection - Collection created concurrently: {name}")
                    return
                logger.error(f"{__name__}:initialize_collection - Error creating collection: {e}")
            except BotoCoreError as e:
                logger.error(f"{__name__}:initialize_collection - Error creating collection: {e}")

    def ingest(
        self,
        text: str,
        metadata: dict[str, Any] | None,
        provider: EmbeddingProvider,
        credential: str | None = None,
    ) -> int:
        """Chunk text, tag each fragment with its corpus position, and upsert."""
        if not self._available:
            logger.warning(f"{__name__}:ingest - S3 Vectors not available, cannot ingest document")
            return 0

        chunks = self._chunker.split_text(text)
        if not chunks:
            return 0

        base_index = self.count()
        fragments = []
        for offset, chunk in enumerate(chunks):
            chunk_metadata = dict(metadata or {})
            chunk_metadata["chunk_index"] = base_index + offset
            fragments.append(Fragment(text=chunk, metadata=chunk_metadata))

        return self.upsert(fragments, provider, credential)

    def upsert(
        self,
        fragments: list[Fragment],
        provider: EmbeddingProvider,
        credential: str | None = None,
    ) -> int:
        """
        Upsert fragments, embedding any that lack a vector first.

        Embedding failures propagate (EmbeddingError); service failures are
        logged and nothing is reported as written.

        Returns:
            int: Number of points written
        """
        if not self._available:
            logger.warning(f"{__name__}:upsert - S3 Vectors not available, cannot upsert documents")
            return 0
        if not fragments:
            return 0

        vectors = []
        for position, fragment in enumerate(fragments):
            if not fragment.embedding:
                fragment.embedding = provider.embed(fragment.text, credential)
            vectors.append({
                "key": self.point_key(fragment, position),
                "data": {"float32": [float(v) for v in fragment.embedding]},
                "metadata": self.to_payload(fragment),
            })

        try:
            for start in range(0, len(vectors), PUT_BATCH_SIZE):
                self._client.put_vectors(
                    vectorBucketName=self._vectors_bucket,
                    indexName=self._index_name,
                    vectors=vectors[start:start + PUT_BATCH_SIZE],
                )
        except BACKEND_ERRORS as e:
            logger.error(
                f"{__name__}:upsert - Error upserting documents to S3 Vectors: {e}",
                extra={"vector_count": len(vectors)},
            )
            return 0

        logger.info(f"{__name__}:upsert - Upserted {len(vectors)} documents to S3 Vectors")
        return len(vectors)

    def search_by_vector(self, query_embedding: list[float], k: int) -> list[ScoredFragment]:
        """
        Nearest-neighbor query bounded to k with metadata returned.

        Scores are cosine similarities (1 - cosine distance).
        """
        if not self._available:
            logger.warning(f"{__name__}:search_by_vector - S3 Vectors not available, returning empty results")
            return []
        if k <= 0:
            return []

        try:
            response = self._client.query_vectors(
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                topK=k,
                queryVector={"float32": [float(v) for v in query_embedding]},
                returnMetadata=True,
                returnDistance=True,
            )
        except BACKEND_ERRORS as e:
            logger.error(f"{__name__}:search_by_vector - Error searching S3 Vectors: {e}")
            return []

        results = []
        for match in response.get("vectors", []):
            payload = match.get("metadata") or {}
            distance = match.get("distance")
            text = payload.get(self.TEXT_KEY)
            results.append(
                ScoredFragment(
                    text=text if isinstance(text, str) else "",
                    score=1.0 - float(distance) if distance is not None else 0.0,
                    metadata=self.from_payload(payload),
                )
            )
        return results

    def count(self) -> int:
        """Count points by paging through list_vectors; 0 on failure."""
        if not self._available:
            return 0

        total = 0
        request: dict[str, Any] = {
            "vectorBucketName": self._vectors_bucket,
            "indexName": self._index_name,
            "maxResults": LIST_PAGE_SIZE,
            "returnData": False,
            "returnMetadata": False,
        }
        try:
            while True:
                response = self._client.list_vectors(**request)
                total += len(response.get("vectors", []))
                next_token = response.get("nextToken")
                if not next_token:
                    break
                request["nextToken"] = next_token
        except BACKEND_ERRORS as e:
            logger.error(f"{__name__}:count - Error counting S3 Vectors points: {e}")
            return 0
        return total

    def collection_info(self) -> dict[str, Any]:
        """Availability, name, dimension and point count of the index."""
        if not self._available:
            return {"available": False}

        try:
            response = self._client.get_index(
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
            )
        except BACKEND_ERRORS as e:
            return {"available": False, "error": str(e)}

        index = response.get("index", {})
        return {
            "available": True,
            "name": self._index_name,
            "dimension": index.get("dimension", self._dimension),
            "points_count": self.count(),
        }

    @staticmethod
    def point_key(fragment: Fragment, position: int) -> str:
        """Deterministic point key from text, source, filename and document position."""
        metadata = fragment.metadata
        hash_input = (
            f"{fragment.text}:{metadata.get('source', '')}:"
            f"{metadata.get('filename', '')}:{position}"
        )
        return hashlib.sha256(hash_input.encode()).hexdigest()[:32]

    @classmethod
    def to_payload(cls, fragment: Fragment) -> dict[str, Any]:
        """Convert fragment text and metadata to an S3 Vectors metadata payload."""
        payload: dict[str, Any] = {}
        for key, value in fragment.metadata.items():
            if value is None:
                continue
            payload[key] = value if isinstance(value, SCALAR_TYPES) else str(value)
        payload[cls.TEXT_KEY] = fragment.text
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> dict[str, Any]:
        """Convert a payload back to metadata, dropping text and non-scalar values."""
        return {
            key: value
            for key, value in payload.items()
            if key != cls.TEXT_KEY and isinstance(value, SCALAR_TYPES)
        }
