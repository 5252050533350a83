#!/usr/bin/env python3
"""
Sales Dashboard CLI: summarize or export a sales file, or start the API server.

USAGE:
  python -m app.cli summary sales.csv                          # Metrics for a file
  python -m app.cli summary sales.csv --city Bhavnagar         # Filtered metrics
  python -m app.cli summary sales.xlsx --date-range last30

  python -m app.cli export sales.csv --output report.xlsx      # Styled workbook
  python -m app.cli export sales.csv --output rows.csv --search chips

  python -m app.cli serve                                      # Start API server
  python -m app.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import mimetypes
import os
import sys
from pathlib import Path

from app.config import configure_logging
from app.data.errors import IngestError
from app.data.loader import ingest_upload
from app.data.schemas import FilterSpec
from app.data.store import DataStore
from app.analytics.charts import city_breakdown, product_breakdown
from app.analytics.filters import apply_filters
from app.analytics.metrics import compute_metrics
from app.excel.export import sales_csv, sales_workbook


def _build_filters(args) -> FilterSpec:
    """Build a FilterSpec from CLI args."""
    return FilterSpec.from_params({
        "date_range": getattr(args, "date_range", None),
        "date_from": getattr(args, "date_from", None),
        "date_to": getattr(args, "date_to", None),
        "city": getattr(args, "city", None),
        "manufacturer": getattr(args, "manufacturer", None),
        "category": getattr(args, "category", None),
        "product": getattr(args, "product", None),
        "search": getattr(args, "search", None),
    })


def _load(path: Path) -> DataStore:
    store = DataStore()
    mime_type, _ = mimetypes.guess_type(path.name)
    result = ingest_upload(store, path.read_bytes(), path.name, mime_type)
    print(f"Loaded {result.count:,} records from {path.name} ({result.dropped:,} malformed rows dropped)")
    return store


def cmd_summary(args) -> int:
    """Print metrics plus top cities/products for a file."""
    store = _load(Path(args.file))
    filters = _build_filters(args)
    rows = apply_filters(store.all(), filters)
    m = compute_metrics(rows)

    print("\n" + "=" * 60)
    print(f"  SALES SUMMARY: {filters.label} ({len(rows):,} rows)")
    print("=" * 60)
    print(f"  Total revenue:   {m.total_revenue:>14,.2f}")
    print(f"  Total quantity:  {m.total_quantity:>14,}")
    print(f"  Top product:     {m.top_product or '-'} ({m.top_product_quantity:,} units)")
    print(f"  Top city:        {m.top_city or '-'} ({m.top_city_revenue:,.2f})")

    print("\nTOP CITIES:\n")
    for i, c in enumerate(city_breakdown(rows)[:args.top], 1):
        print(f"{i:<4}{c['city'][:40]:<42}{c['revenue']:>14,.2f}{c['quantity']:>10,}")

    print("\nTOP PRODUCTS:\n")
    for i, p in enumerate(product_breakdown(rows, limit=args.top), 1):
        print(f"{i:<4}{p['product'][:40]:<42}{p['revenue']:>14,.2f}{p['quantity']:>10,}")
    return 0


def cmd_export(args) -> int:
    """Write the filtered rows as .csv or a styled .xlsx (by output extension)."""
    store = _load(Path(args.file))
    filters = _build_filters(args)
    rows = apply_filters(store.all(), filters)

    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    if out.suffix.lower() == ".xlsx":
        out.write_bytes(sales_workbook(rows, compute_metrics(rows), filters.label))
    else:
        out.write_text(sales_csv(rows), encoding="utf-8")
    print(f"Wrote {len(rows):,} rows to {out}")
    return 0


def cmd_serve(args) -> int:
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Sales Dashboard API on port {args.port}...")
    # One process only: the dataset lives in this process's memory
    uvicorn.run("app.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)
    return 0


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="CSV, XLS or XLSX sales export")
    p.add_argument("--date-range", choices=["all", "last7", "last30", "custom"], help="Date preset")
    p.add_argument("--date-from", help="Start date (inclusive)")
    p.add_argument("--date-to", help="End date (inclusive of the whole day)")
    p.add_argument("--city", help="Exact city name")
    p.add_argument("--manufacturer", help="Exact manufacturer name")
    p.add_argument("--category", help="Exact category")
    p.add_argument("--product", help="Substring of the product name")
    p.add_argument("--search", help="Case-insensitive text search")


def main(argv: list[str] | None = None) -> int:
    configure_logging()

    parser = argparse.ArgumentParser(
        description="Sales Dashboard: retail sales ingest, filtering, and metrics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # summary subcommand
    summary_parser = subparsers.add_parser("summary", help="Print metrics for a sales file")
    _add_filter_args(summary_parser)
    summary_parser.add_argument("--top", type=int, default=10, help="Rows in the top lists (default 10)")
    summary_parser.set_defaults(func=cmd_summary)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Export filtered rows to .csv or .xlsx")
    _add_filter_args(export_parser)
    export_parser.add_argument("--output", required=True, help="Output path (.csv or .xlsx)")
    export_parser.set_defaults(func=cmd_export)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except IngestError as exc:
        print(f"Error ({exc.kind}): {exc.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
