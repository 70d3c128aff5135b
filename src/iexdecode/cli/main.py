"""Main CLI entry point for iexdecode."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from typing import Optional, Sequence

from .. import __version__
from ..cli.layouts import print_layouts
from ..config import DecoderConfig
from ..decoder import IexDecoder
from ..exceptions import IexDecodeError
from ..models.enums import MessageType
from ..models.header import SegmentHeader


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iexdecode",
        description="iexdecode: IEX TOPS/DEEP Market Data Decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  iexdecode capture.pcap.gz                      Print every message as JSON
  iexdecode capture.pcap.gz --symbol AMD         Only messages for AMD
  iexdecode capture.pcap.gz --type QUOTE_UPDATE  Only quote updates
  iexdecode capture.pcap.gz --summary            Header and message counts
  iexdecode --layouts                            Show message wire layouts
        """,
    )

    parser.add_argument("capture", nargs="?", help="pcap/pcapng capture, optionally gzipped")
    parser.add_argument("--symbol", help="only print messages for this symbol")
    parser.add_argument(
        "--type",
        dest="message_type",
        metavar="NAME",
        choices=[t.name for t in MessageType],
        type=str.upper,
        help="only print messages of this type (e.g. QUOTE_UPDATE)",
    )
    parser.add_argument("--limit", type=int, metavar="N", help="stop after N printed messages")
    parser.add_argument(
        "--summary",
        action="store_true",
        help="print the first segment header and per-type counts instead of messages",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail on unknown message types instead of skipping them",
    )
    parser.add_argument("--udp-port", type=int, metavar="PORT", help="only read this UDP port")
    parser.add_argument(
        "--layouts",
        action="store_true",
        help="print the wire layout of every message type and exit",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="log more (-vv for debug)"
    )
    parser.add_argument("--version", action="version", version=f"iexdecode {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the iexdecode CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.layouts:
        print_layouts()
        return 0

    if args.capture is None:
        parser.print_help()
        return 0

    if args.limit is not None and args.limit < 0:
        print(f"Error: --limit must be >= 0, got {args.limit}", file=sys.stderr)
        return 1

    config = DecoderConfig(skip_unknown_types=not args.strict)
    with IexDecoder(config=config) as decoder:
        try:
            decoder.open(args.capture, udp_port=args.udp_port)
        except IexDecodeError as e:
            print(f"Error opening {args.capture}: {e}", file=sys.stderr)
            return 1

        wanted = MessageType[args.message_type] if args.message_type else None
        counts: Counter[str] = Counter()
        printed = 0
        try:
            for message in decoder:
                counts[message.message_type.name] += 1
                if args.summary:
                    continue
                if wanted is not None and message.message_type != wanted:
                    continue
                if args.symbol is not None and getattr(message, "symbol", None) != args.symbol:
                    continue
                if args.limit is not None and printed >= args.limit:
                    break
                print(message.model_dump_json())
                printed += 1
        except IexDecodeError as e:
            print(f"Error decoding {args.capture}: {e}", file=sys.stderr)
            return 1

        if args.summary:
            print_summary(
                decoder.get_first_header(), counts, decoder.stats.heartbeats, decoder.stats.unknown
            )

    return 0


def print_summary(
    header: SegmentHeader,
    counts: Counter[str],
    heartbeats: int,
    unknown: int,
) -> None:
    print(f"{'=' * 8} First segment header {'=' * 8}")
    for name, value in header.model_dump().items():
        print(f"  {name:<24}{value}")
    print(f"  {'send_datetime':<24}{header.send_datetime.isoformat()}")
    print()
    print(f"{'=' * 8} Messages {'=' * 8}")
    for name, count in counts.most_common():
        print(f"  {name:<32}{count:>10}")
    print(f"  {'total':<32}{sum(counts.values()):>10}")
    print(f"  {'heartbeats':<32}{heartbeats:>10}")
    print(f"  {'unknown':<32}{unknown:>10}")


if __name__ == "__main__":
    sys.exit(main())
