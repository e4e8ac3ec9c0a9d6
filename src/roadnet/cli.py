# roadnet/cli.py
import argparse
import logging

from pydantic import ValidationError

from roadnet.app.build import build
from roadnet.config.models import ServerModel, load_config
from roadnet.io.server_logging import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="roadnet", description="Shortest-path routing server over a road network graph."
    )
    parser.add_argument("--config", help="JSON config file (ServerModel)")
    parser.add_argument("--graph", help="graph source file, V/E records")
    parser.add_argument("--transport", choices=["fifo", "stdio"])
    parser.add_argument("--inpipe", help="request pipe path (fifo transport)")
    parser.add_argument("--outpipe", help="response pipe path (fifo transport)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--debug", action="store_true", help="log every request/response")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> ServerModel:
    """Config file first, then command line overrides on top."""
    data = load_config(args.config).model_dump() if args.config else {}
    if args.graph:
        data["graph"] = {"by": "path", "file": args.graph}
    transport = dict(data.get("transport") or {"kind": "fifo"})
    if args.transport and args.transport != transport.get("kind"):
        transport = {"kind": args.transport}
    if transport["kind"] == "fifo":
        if args.inpipe:
            transport["inpipe"] = args.inpipe
        if args.outpipe:
            transport["outpipe"] = args.outpipe
    data["transport"] = transport
    log = dict(data.get("log") or {})
    if args.log_level:
        log["level"] = args.log_level
    if args.debug:
        log["debug"] = True
    data["log"] = log
    return ServerModel.model_validate(data)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logger = configure_logging(level=args.log_level or "INFO")
    try:
        cfg = config_from_args(args)
        app = build(cfg)
        served = app.run()
    except (ValidationError, OSError, ValueError) as exc:
        logger.log(logging.ERROR, "server_failed", extra={"extra": {"error": str(exc)}})
        return 1
    except KeyboardInterrupt:
        return 0
    logger.debug("exit", extra={"extra": {"served": served}})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
