"""
Chunk naming scheme shared by the splitter and the merger.

A chunk of ``/data/disk.iso`` is named ``/data/disk.iso.chunk.<N>`` where N is
the 1-based sequence number, zero-padded to the number of digits of the
total chunk count so that name order and numeric order agree.
"""
import os

CHUNK_SEPARATOR = ".chunk."


def calculate_digits(total_chunks):
    """Number of decimal digits in total_chunks, at least 1."""
    if total_chunks <= 0:
        return 1
    return len(str(total_chunks))


def format_chunk_name(base_path, seq, digit_width):
    return f"{base_path}{CHUNK_SEPARATOR}{seq:0{digit_width}d}"


def parse_chunk_seq(filename):
    """
    Extracts the sequence number from a chunk filename.

    Everything after the last separator is taken, and anything from the last
    dot onwards is dropped before parsing. Names that do not parse give 0,
    which sorts them ahead of every real chunk.

    Args:
        filename (str): Chunk file name or path.

    Returns:
        int: The sequence number, or 0.
    """
    index = filename.rfind(CHUNK_SEPARATOR)
    if index == -1:
        return 0

    num = filename[index + len(CHUNK_SEPARATOR):]
    dot = num.rfind(".")
    if dot != -1:
        num = num[:dot]

    # int() would also accept signs, blanks and underscores
    if not (num.isascii() and num.isdigit()):
        return 0
    return int(num)


def merge_output_path(prefix_path):
    """Path of the merged file: the prefix's file name cut at its first separator."""
    directory, base = os.path.split(prefix_path)
    if CHUNK_SEPARATOR in base:
        base = base.split(CHUNK_SEPARATOR, 1)[0]
    return os.path.join(directory, base)
