"""
Vector database boundary layer.

Provides the two interchangeable fragment backends.
- LocalVectorStore: in-process store with exhaustive cosine search and JSON snapshots
- S3VectorIndex: Amazon S3 Vectors index

Dependencies: boto3, pydantic
System role: Vector store adapters for RAG retrieval
"""

from navigator.boundary.vdb.base import VectorBackend
from navigator.boundary.vdb.local_vector_store import LocalVectorStore
from navigator.boundary.vdb.s3_vector_index import S3VectorIndex

__all__ = [
    "VectorBackend",
    "LocalVectorStore",
    "S3VectorIndex",
]
