"""CLI for panel: render traffic snapshots and server logs, run the API."""
import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from app.config import settings
from app.schemas.traffic import Service
from app.services.selector import ALL_ROUTES, build_chart
from app.utils.formatting import format_bytes, format_x_axis
from app.utils.logs import parse_log
from app.utils.timestamps import MalformedSampleError, parse_timestamp


def cmd_chart(args: argparse.Namespace) -> int:
    try:
        service = Service.model_validate_json(Path(args.file).read_text(encoding="utf-8"))
        now = parse_timestamp(args.now) if args.now else None
    except OSError as e:
        print(f"error: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return 1
    except (ValidationError, MalformedSampleError) as e:
        print(f"error: invalid input: {e}", file=sys.stderr)
        return 1
    chart = build_chart(service, args.route, now)
    print(chart.label)
    print(f"Total Sent: {chart.total_sent}")
    print(f"Total Received: {chart.total_received}")
    print(f"Latency: {chart.latency}")
    for point in chart.points:
        print(f"{format_x_axis(point.timestamp)}  {format_bytes(point.value.sent)}  {format_bytes(point.value.received)}")
    return 0


def cmd_logs(args: argparse.Namespace) -> int:
    try:
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
    except OSError as e:
        print(f"error: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return 1
    for line in lines:
        if not line.strip():
            continue
        parsed = parse_log(line)
        if parsed is None:
            print(line)
        else:
            print(f"{parsed.timestamp} [{parsed.level}] {parsed.message}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("app.main:app", host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Warptail Panel CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    chart = sub.add_parser("chart", help="Print the traffic chart of a service snapshot (JSON)")
    chart.add_argument("file", help="Service snapshot as returned by the proxy API")
    chart.add_argument("--route", default=ALL_ROUTES, help="Route key, or 'all' for the summary")
    chart.add_argument("--now", help="Reference instant (ISO-8601), defaults to the current time")
    chart.set_defaults(func=cmd_chart)

    logs = sub.add_parser("logs", help="Pretty-print server log lines")
    logs.add_argument("file", help="File with one log line per row")
    logs.set_defaults(func=cmd_logs)

    serve = sub.add_parser("serve", help="Run the panel API")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
