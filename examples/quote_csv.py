#!/usr/bin/env python3
"""Extract top-of-book quotes from an IEX TOPS capture into CSV.

Usage:
    python quote_csv.py data_feeds_20180127_IEXTP1_TOPS1.6.pcap.gz quotes.csv [SYMBOL ...]
"""

from __future__ import annotations

import csv
import logging
import sys

from iexdecode import IexDecoder, QuoteUpdateMessage

COLUMNS = ["timestamp", "symbol", "bid_size", "bid_price", "ask_price", "ask_size"]


def main(argv: list[str]) -> int:
    """Write one CSV row per quote update."""
    if len(argv) < 2:
        print(__doc__)
        return 1

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    capture, output, symbols = argv[0], argv[1], set(argv[2:])

    decoder = IexDecoder()
    if not decoder.open_for_decoding(capture):
        return 1

    rows = 0
    with decoder, open(output, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(COLUMNS)
        for msg in decoder:
            if not isinstance(msg, QuoteUpdateMessage):
                continue
            if symbols and msg.symbol not in symbols:
                continue
            writer.writerow([getattr(msg, column) for column in COLUMNS])
            rows += 1

        print(f"Wrote {rows} quotes from {decoder.stats.packets} packets to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
