import os
from dataclasses import dataclass, field
from typing import List

import chunkfile
from chunkfile import log
from chunkfile.core.errors import ChunkIOError, InvalidParameterError, NoChunksFoundError
from chunkfile.core.naming import (
    CHUNK_SEPARATOR,
    calculate_digits,
    format_chunk_name,
    merge_output_path,
    parse_chunk_seq,
)
from chunkfile.core.units import format_size


@dataclass
class MergeResult:
    output_path: str
    chunk_files: List[str]
    total_size: int
    deleted: List[str] = field(default_factory=list)
    failed_deletions: List[str] = field(default_factory=list)


def resolve_buffer_size(buffer_size=None):
    """Validates buffer_size, falling back to the configured BUFFER_SIZE."""
    if buffer_size is None:
        buffer_size = chunkfile.BUFFER_SIZE
    try:
        value = int(buffer_size)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"invalid buffer size: {buffer_size!r}") from None
    if value <= 0:
        raise InvalidParameterError(f"buffer size must be positive, got {value}")
    return value


def copy_stream(src, dst, limit=None, buffer_size=None, src_path="", dst_path=""):
    """
    Copies bytes from src to dst through a buffer of at most buffer_size bytes.

    Args:
        src: Binary file object to read from.
        dst: Binary file object to write to.
        limit (int | None): Bytes to copy, or None to copy until end of stream.
        buffer_size (int): Largest single read (default: BUFFER_SIZE).
        src_path (str): Name of src, used in error messages.
        dst_path (str): Name of dst, used in error messages.

    Returns:
        int: Number of bytes written. Less than limit if src ran out first.
    """
    buffer_size = resolve_buffer_size(buffer_size)
    written = 0
    while limit is None or written < limit:
        to_read = buffer_size if limit is None else min(buffer_size, limit - written)

        try:
            data = src.read(to_read)
        except OSError as e:
            raise ChunkIOError("read file", src_path, e) from e
        if not data:
            break

        try:
            dst.write(data)
        except OSError as e:
            raise ChunkIOError("write file", dst_path, e) from e
        written += len(data)

    return written


def split_file(file_path, chunk_size, buffer_size=None):
    """
    Splits a file into chunk files placed next to it.

    Args:
        file_path (str): Path to the input file.
        chunk_size (int): Size of each chunk in bytes. The last chunk holds
            whatever remains.
        buffer_size (int): Copy buffer size in bytes (default: 1MB).

    Returns:
        List[str]: Ordered list of chunk file paths.
    """
    if chunk_size <= 0:
        raise InvalidParameterError(f"chunk size must be positive, got {chunk_size}")
    buffer_size = resolve_buffer_size(buffer_size)

    file_path = os.path.abspath(file_path)
    try:
        f = open(file_path, "rb")
    except OSError as e:
        raise ChunkIOError("open file", file_path, e) from e

    with f:
        try:
            file_size = os.fstat(f.fileno()).st_size
        except OSError as e:
            raise ChunkIOError("get file info for", file_path, e) from e

        total_chunks = (file_size + chunk_size - 1) // chunk_size
        digits = calculate_digits(total_chunks)

        log(f"File size: {format_size(file_size)}", context="SPLIT")
        log(f"Chunk size: {format_size(chunk_size)}", context="SPLIT")
        log(f"Total chunks: {total_chunks}", context="SPLIT")

        chunks = []
        for i in range(total_chunks):
            chunk_path = format_chunk_name(file_path, i + 1, digits)
            bytes_left = chunk_size
            if i == total_chunks - 1:
                bytes_left = file_size - i * chunk_size

            try:
                cf = open(chunk_path, "wb")
            except OSError as e:
                raise ChunkIOError("create chunk file", chunk_path, e) from e

            try:
                with cf:
                    written = copy_stream(f, cf, bytes_left, buffer_size, file_path, chunk_path)
            except OSError as e:
                raise ChunkIOError("close chunk file", chunk_path, e) from e

            chunks.append(chunk_path)
            log(f"Created chunk file: {chunk_path} ({format_size(written)})", context="SPLIT")

    log("File splitting completed", context="SPLIT")
    return chunks


def find_chunk_files(prefix_path):
    """
    Lists the chunk files for a prefix, ordered by sequence number.

    Directory entries are taken in name order before the stable sort, so
    names with an unreadable sequence number come first, in name order.

    Matching is a plain name prefix test: the prefix `video.mp4` also picks up
    the chunks of a sibling such as `video.mp4.bak.chunk.N`, and the two sets
    are interleaved by sequence number. Files whose names extend one another
    should be split in separate directories.
    """
    prefix_path = os.path.abspath(prefix_path)
    directory, base = os.path.split(prefix_path)

    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        raise ChunkIOError("read directory", directory, e) from e

    chunk_files = [
        os.path.join(directory, name) for name in names
        if name.startswith(base)
        and CHUNK_SEPARATOR in name
        and os.path.isfile(os.path.join(directory, name))
    ]
    chunk_files.sort(key=parse_chunk_seq)
    return chunk_files


def _remove_chunks(chunk_files, result):
    log("Starting cleanup of chunk files...", context="MERGE")
    for chunk_path in chunk_files:
        try:
            os.remove(chunk_path)
        except OSError as e:
            result.failed_deletions.append(chunk_path)
            log(f"Warning: failed to delete chunk file {chunk_path}: {e}", context="MERGE")
        else:
            result.deleted.append(chunk_path)
            log(f"Deleted chunk file: {chunk_path}", context="MERGE")
    log("Chunk file cleanup completed", context="MERGE")


def merge_files(prefix_path, clear=False, buffer_size=None):
    """
    Reconstructs a file from its chunks.

    Args:
        prefix_path (str): Original file path (or any prefix of the chunk names).
        clear (bool): Delete the chunk files once the merge has succeeded.
        buffer_size (int): Copy buffer size in bytes (default: 1MB).

    Returns:
        MergeResult: Output path, chunks used, bytes written and cleanup outcome.
    """
    buffer_size = resolve_buffer_size(buffer_size)

    prefix_path = os.path.abspath(prefix_path)
    chunk_files = find_chunk_files(prefix_path)
    if not chunk_files:
        raise NoChunksFoundError(prefix_path)

    output_path = merge_output_path(prefix_path)
    if not os.path.basename(output_path) or os.path.isdir(output_path):
        raise InvalidParameterError(
            f"cannot derive an output file from prefix {prefix_path}, "
            f"use the original file path as prefix"
        )

    try:
        out_file = open(output_path, "wb")
    except OSError as e:
        raise ChunkIOError("create output file", output_path, e) from e

    total_size = 0
    try:
        with out_file:
            for i, chunk_path in enumerate(chunk_files, start=1):
                log(f"Processing chunk file {i}/{len(chunk_files)}: {chunk_path}", context="MERGE")

                try:
                    cf = open(chunk_path, "rb")
                except OSError as e:
                    raise ChunkIOError("open chunk file", chunk_path, e) from e

                with cf:
                    try:
                        total_size += os.fstat(cf.fileno()).st_size
                    except OSError as e:
                        raise ChunkIOError("get chunk file info for", chunk_path, e) from e
                    copy_stream(cf, out_file, None, buffer_size, chunk_path, output_path)
    except OSError as e:
        raise ChunkIOError("close output file", output_path, e) from e

    log(f"Created merged file: {output_path} ({format_size(total_size)}, {total_size} bytes)", context="MERGE")

    result = MergeResult(output_path, chunk_files, total_size)
    if clear:
        _remove_chunks(chunk_files, result)
    return result
