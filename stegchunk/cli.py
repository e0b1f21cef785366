"""
stegchunk command line interface.

Commands:
  stegchunk encode FILE CHUNK_TYPE MESSAGE [OUTPUT] - Hide MESSAGE in a new CHUNK_TYPE chunk
  stegchunk decode FILE CHUNK_TYPE                  - Show the message of the first CHUNK_TYPE chunk
  stegchunk remove FILE CHUNK_TYPE                  - Remove the first CHUNK_TYPE chunk
  stegchunk print FILE                              - List every chunk holding a text message

FILE may be an http(s) link for decode and print.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import requests

import stegchunk
from .png import Png, PngChunk
from .pngexceptions import ChunkNotFoundException, PayloadEncodingException, StegChunkException

logger = logging.getLogger(__name__)

# Chunks whose payload may decode as text but never hold a message
_IGNORED_TYPES = ('sBIT', 'IEND')


def _display_name(filename) -> str:
    return Path(str(filename)).name


def cmd_encode(args: argparse.Namespace) -> int:
    png = Png.from_path(args.file)
    png.append_chunk(PngChunk(args.chunk_type, args.message.encode('utf-8')))
    if args.output is not None:
        png.save(args.output, overwrite=False)
        target = args.output
    else:
        png.save(args.file)
        target = args.file
    print("The message has been added to '{}'.".format(_display_name(target)))
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    png = stegchunk.open(args.file)
    chunk = png.chunk_by_type(args.chunk_type)
    if chunk is None:
        print("Message not found")
        return 0
    print('The message in \'{}\' is "{}".'.format(_display_name(args.file), chunk.data_as_string()))
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    png = Png.from_path(args.file)
    try:
        chunk = png.remove_chunk(args.chunk_type)
    except ChunkNotFoundException as e:
        print(e)
        return 0
    png.save(args.file)
    print('"{}" message has been removed.'.format(chunk.data_as_string()))
    return 0


def secret_chunks(png: Png) -> list:
    """
    :returns: (chunk, message) for every chunk of png that holds a text payload,
        leaving out the chunk types that are known not to hide anything.
    """
    secrets = []
    for chunk in png.chunks:
        if str(chunk.type) in _IGNORED_TYPES:
            continue
        try:
            message = chunk.data_as_string()
        except PayloadEncodingException:
            logger.debug("skipping binary chunk %r", chunk)
            continue
        secrets.append((chunk, message))
    return secrets


def cmd_print(args: argparse.Namespace) -> int:
    png = stegchunk.open(args.file)
    secrets = secret_chunks(png)
    if not secrets:
        print("No secret found.")
        return 0
    for chunk, message in secrets:
        print('Key \'{}\' has secret : "{}"'.format(chunk.type, message))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stegchunk",
        description="Hide messages in PNG chunks",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + stegchunk.__version__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug information")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("encode", help="Hide a message in a new chunk")
    p.add_argument("file", help="PNG file to read")
    p.add_argument("chunk_type", help="Four letters chunk type, e.g. ruSt")
    p.add_argument("message", help="Message to hide")
    p.add_argument("output", nargs="?", default=None,
                   help="New file to write (default: overwrite FILE)")
    p.set_defaults(func=cmd_encode)

    p = sub.add_parser("decode", help="Show a hidden message")
    p.add_argument("file", help="PNG file or http(s) link")
    p.add_argument("chunk_type", help="Chunk type holding the message")
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("remove", help="Remove a hidden message")
    p.add_argument("file", help="PNG file to modify")
    p.add_argument("chunk_type", help="Chunk type holding the message")
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser("print", help="List every hidden message")
    p.add_argument("file", help="PNG file or http(s) link")
    p.set_defaults(func=cmd_print)

    return parser


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or 'DEBUG' in os.environ else logging.WARNING
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger('stegchunk').setLevel(level)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except (StegChunkException, OSError, requests.RequestException) as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
