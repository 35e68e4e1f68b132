"""
Command line front end: poll gpsd once and print one SNMP gauge.

    gpssnmp [-h] [-V] [-D LEVEL] -g OID [server[:port[:device]]]

Exit status is 0 when the gauge line was printed (or for -h/-V) and 1 on any
failure.
"""
import argparse
import logging
import sys
from typing import List, Optional, Tuple

from gpssnmp import __version__
from gpssnmp.errors import GpssnmpError, InvalidArgument, MissingArgument, UnknownIdentifier
from gpssnmp.global_config import (
    DEFAULT_PORT, DEFAULT_SERVER, PollSettings, get_global_config, get_poll_settings,
    update_poll_settings,
)
from gpssnmp.gpsd_client import GpsdClient
from gpssnmp.metrics import aggregate
from gpssnmp.oid_table import OID_SNR_AVG, OID_USED, OID_VISIBLE, is_known_oid, lookup_oid
from gpssnmp.poll import wait_for_sky

logger = logging.getLogger(__name__)

PROG = "gpssnmp"

USAGE = (
    "Usage:\n"
    "{prog} [-h] [-V] [-D LEVEL] -g OID [server[:port[:device]]]\n\n"
    "Examples:\n"
    "to get OID_VISIBLE\n"
    "   $ {prog} -g " + OID_VISIBLE + "\n"
    "   " + OID_VISIBLE + " = gauge: 13\n\n"
    "to get OID_USED\n"
    "   $ {prog} -g " + OID_USED + "\n"
    "   " + OID_USED + " = gauge: 4\n\n"
    "to get OID_SNR_AVG\n"
    "   $ {prog} -g " + OID_SNR_AVG + "\n"
    "   " + OID_SNR_AVG + " = gauge: 22.250000\n"
)


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise InvalidArgument(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog=PROG, add_help=False)
    parser.add_argument("-g", "--get", dest="oid", default="")
    parser.add_argument("-D", "--debug", dest="debug", type=int, default=0)
    parser.add_argument("-h", "-?", "--help", dest="help", action="store_true")
    parser.add_argument("-V", "--version", dest="version", action="store_true")
    parser.add_argument("source", nargs="?", default=None)
    return parser


def parse_source_spec(spec: Optional[str]) -> Tuple[str, str, Optional[str]]:
    """
    Split `server[:port[:device]]` into its parts.

    An IPv6 server is written in brackets, e.g. `[::1]:2947:/dev/ttyUSB0`.
    Missing or empty parts fall back to localhost:2947 and no device.

    Raises:
        InvalidArgument: unterminated bracket or a port that is not 1-65535
    """
    server, port, device = DEFAULT_SERVER, DEFAULT_PORT, None
    if not spec:
        return server, port, device

    rest = spec
    if spec.startswith("["):
        end = spec.find("]")
        if end < 0:
            raise InvalidArgument(f"bad server address {spec}")
        server = spec[1:end] or DEFAULT_SERVER
        rest = spec[end + 1:]
        if rest.startswith(":"):
            rest = rest[1:]
        parts = rest.split(":", 1) if rest else []
    else:
        parts = spec.split(":", 2)
        server = parts.pop(0) or DEFAULT_SERVER

    if parts:
        port = parts.pop(0) or DEFAULT_PORT
    if parts:
        device = parts.pop(0) or None

    if not port.isdigit() or not 0 < int(port) < 65536:
        raise InvalidArgument(f"bad port {port}")
    return server, port, device


def configure_logging(debug_level: int = 0) -> logging.Logger:
    """
    Send package log records to stderr; stdout carries only the gauge line.

    Args:
        debug_level: 0 warnings only, 1 adds info, 2 or more adds debug

    Returns:
        the package logger
    """
    if debug_level >= 2:
        level = logging.DEBUG
    elif debug_level == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    package_logger = logging.getLogger("gpssnmp")
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    package_logger.addHandler(handler)
    return package_logger


def poll_once(oid: str, settings: Optional[PollSettings] = None) -> str:
    """
    Connect, wait for one SKY report, and return the formatted gauge line.

    The OID is checked before connecting so an unknown one never touches the
    daemon. The session is closed on every path.
    """
    if settings is None:
        settings = get_poll_settings()
    if not is_known_oid(oid):
        raise UnknownIdentifier(oid)

    with GpsdClient(settings.server, settings.port_number) as client:
        client.stream(settings.device)
        sky = wait_for_sky(client, settings.timeout, settings.wait_slice)

    metrics = aggregate(sky, settings.snr_floor)
    logger.info("metrics: %s", metrics)
    return lookup_oid(oid, metrics)


def _report_error(error: Exception, show_usage: bool = False) -> None:
    sys.stderr.write(f"{PROG}: ERROR: {error}\n")
    if show_usage:
        sys.stderr.write("\n" + USAGE.format(prog=PROG))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except InvalidArgument as e:
        _report_error(e, show_usage=True)
        return 1

    if args.help:
        sys.stdout.write(USAGE.format(prog=PROG))
        return 0
    if args.version:
        sys.stderr.write(f"{PROG}: {__version__}\n")
        return 0

    get_global_config().debug_level = args.debug
    configure_logging(args.debug)

    try:
        if not args.oid:
            raise MissingArgument()
        server, port, device = parse_source_spec(args.source)
        update_poll_settings({"server": server, "port": port, "device": device})
        line = poll_once(args.oid)
    except (MissingArgument, InvalidArgument, UnknownIdentifier) as e:
        _report_error(e, show_usage=True)
        return 1
    except GpssnmpError as e:
        _report_error(e)
        return 1

    sys.stdout.write(line + "\n")
    return 0
