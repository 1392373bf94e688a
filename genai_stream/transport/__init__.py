"""Transport layer: wire codec, streaming RPC transport and its protocols."""

from .protocol import ChunkStream, Transport
from .grpc_transport import GrpcChunkStream, GrpcTransport

__all__ = ["ChunkStream", "Transport", "GrpcChunkStream", "GrpcTransport"]
