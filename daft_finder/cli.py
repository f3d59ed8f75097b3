"""CLI entrypoint for Daft Rental Finder."""

import argparse
import json
import sys


def _format_listing(record) -> str:
    price = record.price_text or "price unknown"
    beds = record.beds_text or "beds unknown"
    line = f"{record.address} | {price} | {beds}"
    if record.property_type_text:
        line += f" | {record.property_type_text}"
    if record.energy_rating:
        line += f" | BER {record.energy_rating}"
    return f"{line}\n    {record.url}"


def cmd_search(args):
    """Search rentals and print the matching listings."""
    from daft_finder.exceptions import DaftFinderError
    from daft_finder.scraper.orchestrator import SearchOrchestrator
    from daft_finder.validation import parse_search_request

    payload = {
        "location": args.location,
        "min_price": args.min_price,
        "max_price": args.max_price,
        "num_beds": args.beds,
        "property_type": args.type,
    }

    try:
        request = parse_search_request(payload)
        results = SearchOrchestrator().search(request.to_criteria())
    except DaftFinderError as e:
        print(f"✗ Search failed: {e.message}", file=sys.stderr)
        if e.details:
            print(f"  {json.dumps(e.details)}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps([record.to_dict() for record in results], indent=2))
        return

    print(f"✓ Found {len(results)} listings")
    for record in results:
        print(f"  {_format_listing(record)}")


def cmd_details(args):
    """Fetch a listing from the Daft.ie API."""
    from daft_finder.exceptions import DaftFinderError
    from daft_finder.scraper.orchestrator import SearchOrchestrator
    from daft_finder.validation import parse_details_request

    try:
        request = parse_details_request({"property_id": args.property_id})
        data = SearchOrchestrator().get_details(request.property_id)
    except DaftFinderError as e:
        print(f"✗ Details failed: {e.message}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(data, indent=2))


def cmd_serve(args):
    """Start the FastAPI server."""
    import uvicorn

    from daft_finder.config import settings

    uvicorn.run(
        "daft_finder.api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )


def main(argv=None):
    from daft_finder.logging_config import setup_logging

    parser = argparse.ArgumentParser(description="Daft Rental Finder")
    parser.add_argument("--log-level", default=None, help="Override DAFT_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command")

    # search
    p_search = sub.add_parser("search", help="Search rentals on daft.ie")
    p_search.add_argument(
        "--location",
        action="append",
        help="Location to search (repeat for several, matched with OR)",
    )
    p_search.add_argument("--min-price", type=float, default=None, help="Minimum monthly rent")
    p_search.add_argument("--max-price", type=float, default=None, help="Maximum monthly rent")
    p_search.add_argument("--beds", type=int, default=None, help="Exact number of bedrooms")
    p_search.add_argument("--type", default=None, help="Property type, e.g. apartment or house")
    p_search.add_argument("--json", action="store_true", help="Print results as JSON")
    p_search.set_defaults(func=cmd_search)

    # details
    p_details = sub.add_parser("details", help="Fetch a listing via the Daft.ie API (needs DAFT_API_KEY)")
    p_details.add_argument("property_id", help="Daft listing ID")
    p_details.set_defaults(func=cmd_details)

    # serve
    p_serve = sub.add_parser("serve", help="Start the HTTP API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)
    setup_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
