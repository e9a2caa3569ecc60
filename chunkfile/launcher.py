import argparse
import os
import sys
from dataclasses import dataclass

from chunkfile import DEFAULT_CHUNK_SIZE, DEFAULT_UNIT, log
from chunkfile.core.chunker import merge_files, split_file
from chunkfile.core.errors import ChunkfileError, InvalidParameterError
from chunkfile.core.units import UNITS, parse_unit


class ChunkfileArgumentParser(argparse.ArgumentParser):
    """Exits with status 1 on usage errors, like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


@dataclass
class SplitParams:
    path: str
    chunk_size: int


@dataclass
class MergeParams:
    path: str
    clear: bool = False


def str_to_bool(value):
    lowered = value.strip().lower()
    if lowered in ("1", "true", "t", "yes", "y"):
        return True
    if lowered in ("0", "false", "f", "no", "n"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value}")


def build_parser():
    parser = ChunkfileArgumentParser(
        prog="chunkfile",
        description="Split large files into chunks and merge them back together.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    split_parser = subparsers.add_parser(
        "split",
        help="Split a file into smaller chunks",
        description=f"Split a large file into numbered chunk files. "
                    f"Default chunk size is {DEFAULT_CHUNK_SIZE}{DEFAULT_UNIT}; "
                    f"supported units are {', '.join(UNITS)} (case-insensitive).",
    )
    split_parser.add_argument("-p", "--path", default="", help="path to the file to split")
    split_parser.add_argument("-s", "--size", type=int, default=DEFAULT_CHUNK_SIZE, help="size of each chunk")
    split_parser.add_argument("-u", "--unit", default=DEFAULT_UNIT, help="size unit (B, KB, MB, GB)")

    merge_parser = subparsers.add_parser(
        "merge",
        help="Merge previously split chunks",
        description="Merge chunk files back into the complete file. Every file in the "
                    "prefix directory whose name starts with the prefix and contains "
                    "'.chunk.' is merged, including chunks of longer names such as "
                    "'<prefix>.bak.chunk.N'.",
    )
    merge_parser.add_argument("-p", "--path", default="", help="prefix of chunk files")
    merge_parser.add_argument(
        "-c", "--clear", type=str_to_bool, nargs="?", const=True, default=False,
        help="delete chunk files after successful merge",
    )
    return parser


def split_params_from_args(args):
    if not args.path:
        raise InvalidParameterError("please specify the file path to split")
    multiplier = parse_unit(args.unit)
    if args.size <= 0:
        raise InvalidParameterError(f"chunk size must be positive, got {args.size}")
    return SplitParams(os.path.abspath(args.path), args.size * multiplier)


def merge_params_from_args(args):
    if not args.path:
        raise InvalidParameterError("please specify the chunk file prefix")
    return MergeParams(os.path.abspath(args.path), args.clear)


def run_split(params):
    return split_file(params.path, params.chunk_size)


def run_merge(params):
    return merge_files(params.path, clear=params.clear)


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        if args.command == "split":
            run_split(split_params_from_args(args))
        else:
            run_merge(merge_params_from_args(args))
    except ChunkfileError as e:
        log(str(e), context="ERROR")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
