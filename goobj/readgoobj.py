"""Command line reader for go object files"""
import argparse
import asyncio
import logging
import sys

from . import printer, xyaml
from .parser import parse_file


def main():
    parser = argparse.ArgumentParser(
        description="Print the symbols defined in a go object file"
    )
    parser.add_argument("file", metavar="file", type=str,
                        help="Object file to read")
    parser.add_argument("--output", "-o", dest="outfile", metavar="file",
                        type=str, help="File to save to (default: stdout)",
                        nargs="?")
    parser.add_argument("--yaml", dest="yaml", action="store_const",
                        default=False, const=True,
                        help="Dump the decoded file as yaml instead of tables")
    parser.add_argument("--with-data", dest="with_data", action="store_const",
                        default=False, const=True,
                        help="Include symbol contents in the yaml dump")
    parser.add_argument("--relocations", dest="relocations",
                        action="store_const", default=False, const=True,
                        help="Also print the list of relocations")
    parser.add_argument("--offset", dest="offset", metavar="n", type=int,
                        default=0, help="Start reading at this offset")
    parser.add_argument("--length", dest="length", metavar="n", type=int,
                        default=None, help="Read at most n bytes")
    parser.add_argument("--progress", dest="progress", action="store_const",
                        default=False, const=True,
                        help="Show a progress bar while reading the data")
    parser.add_argument("--verbose", "-v", dest="verbose",
                        action="store_const", default=False, const=True,
                        help="Log what is being decoded")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    end = None
    if args.length is not None:
        end = args.offset + args.length

    try:
        objfile = asyncio.run(parse_file(args.file, args.offset, end,
                                         progress=args.progress))
    except (ValueError, OSError) as e:
        parser.exit(1, f"failed to parse {args.file}: {e}\n")

    if args.outfile is None:
        _write(objfile, args, sys.stdout)
        sys.stdout.flush()
        return

    try:
        with open(args.outfile, "w", encoding="utf-8") as outfile:
            _write(objfile, args, outfile)
    except OSError as e:
        parser.exit(1, f"failed to write {args.outfile}: {e}\n")


def _write(objfile, args, outfile):
    if args.yaml:
        outfile.write(xyaml.dump_yaml(objfile, args.with_data))
        return
    printer.print_symbols(objfile, outfile)
    outfile.write("\n")
    printer.print_funcdata(objfile, outfile)
    if args.relocations:
        outfile.write("\n")
        printer.print_relocations(objfile, outfile)


if __name__ == "__main__":
    main()
