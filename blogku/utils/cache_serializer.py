"""
Serialization and compression utilities for caching.

Uses orjson for high-performance JSON serialization/deserialization.
"""

from base64 import b64decode, b64encode
from binascii import Error as BinasciiError
from gzip import BadGzipFile
from gzip import compress as gzip_compress
from gzip import decompress as gzip_decompress
from typing import Any
from zlib import error as ZlibError  # noqa: N812

from orjson import OPT_NON_STR_KEYS, JSONDecodeError
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads
from pydantic_core import PydanticSerializationError

from blogku.errors import (
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheSerializationError,
)
from blogku.monitoring import get_logger

logger = get_logger(__name__)

COMPRESSION_MARKER = "\x00GZIP\x00"


def serialize(value: object) -> str:
    """
    Serialize value to JSON string.

    Args:
        value: Value to serialize.

    Returns:
        JSON serialized string.

    Raises:
        CacheSerializationError: If serialization fails.
    """
    try:
        # orjson returns bytes, datetimes are emitted as RFC 3339
        return orjson_dumps(value, default=str, option=OPT_NON_STR_KEYS).decode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        logger.exception("Serialization failed")
        raise CacheSerializationError from e


def deserialize(value: str) -> Any:  # noqa: ANN401
    """
    Deserialize JSON string to value.

    Args:
        value: JSON string to deserialize.

    Returns:
        Deserialized value.

    Raises:
        CacheDeserializationError: If deserialization fails.
    """
    try:
        return orjson_loads(value)
    except (JSONDecodeError, TypeError, ValueError) as e:
        logger.exception("Deserialization failed")
        raise CacheDeserializationError from e


def compress(data: str) -> str:
    """
    Compress data using gzip.

    Args:
        data: Data to compress.

    Returns:
        Compressed data as base64-encoded string with marker.

    Raises:
        CacheCompressionError: If compression fails.
    """
    try:
        compressed = gzip_compress(data.encode("utf-8"))
        return COMPRESSION_MARKER + b64encode(compressed).decode("ascii")
    except (UnicodeEncodeError, ValueError) as e:
        logger.exception("Compression failed")
        raise CacheCompressionError from e


def decompress(data: str) -> str:
    """
    Decompress gzip data.

    Data without the compression marker is returned unchanged.

    Args:
        data: Compressed base64-encoded data with marker.

    Returns:
        Decompressed string.

    Raises:
        CacheDecompressionError: If decompression fails.
    """
    if not data.startswith(COMPRESSION_MARKER):
        return data
    try:
        compressed = b64decode(data[len(COMPRESSION_MARKER) :].encode("ascii"), validate=True)
        return gzip_decompress(compressed).decode("utf-8")
    except (BinasciiError, BadGzipFile, ZlibError, EOFError, UnicodeError, ValueError) as e:
        logger.exception("Decompression failed")
        raise CacheDecompressionError from e


def do_compress(data: str, threshold: int) -> bool:
    """
    Determine if data should be compressed.

    Args:
        data: Data to check.
        threshold: Size threshold in bytes.

    Returns:
        True if data size exceeds threshold.
    """
    return len(data.encode("utf-8")) > threshold
