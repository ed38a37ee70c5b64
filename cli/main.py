"""UtiliDesk CLI -- the `utilidesk` command.

Usage:
    utilidesk serve                      Start the widget server
    utilidesk status                     Show config and inventory status
    utilidesk cron "<expr>"              Parse, canonicalize and describe a cron line
    utilidesk cron-check "<expr>" [--at] Check whether a time matches a cron line
    utilidesk subnet <ip> <mask>         IPv4 subnet details
    utilidesk url <raw>                  Normalize a repository URL
    utilidesk licenses [--out PATH]      Write the dependency license inventory
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the UtiliDesk server."""
    from main import run, setup_logging
    setup_logging("INFO")

    try:
        asyncio.run(run(config_path=args.config))
    except KeyboardInterrupt:
        pass


def cmd_status(args: argparse.Namespace) -> None:
    """Show config and inventory status."""
    from cli.banner import print_banner
    from core.config import get_home_dir, load_config
    print_banner()

    home = get_home_dir()
    config_path = home / "config.yaml"
    config = load_config(config_path=config_path)

    print(f"  Home:     {home}")
    print(f"  Config:   {config_path} ({'exists' if config_path.exists() else 'NOT FOUND'})")
    print(f"  Server:   http://{config.server.host}:{config.server.port}")
    inventory = config.licenses_path
    print(f"  Licenses: {inventory} ({'exists' if inventory.is_file() else 'NOT FOUND'})")
    print()


def cmd_cron(args: argparse.Namespace) -> None:
    """Parse a cron line and print its canonical form and description."""
    from cron import parse_cron

    result = parse_cron(args.expression)
    if not result.ok:
        print(f"  Error: {result.error}")
        sys.exit(1)

    print(f"  Canonical: {result.cron}")
    print(f"  Meaning:   {result.human}")


def cmd_cron_check(args: argparse.Namespace) -> None:
    """Check whether a datetime falls on a cron schedule."""
    from cron import cron_matches

    try:
        when = datetime.fromisoformat(args.at) if args.at else datetime.now()
    except ValueError:
        print(f"  Invalid --at timestamp: {args.at!r} (expected ISO 8601)")
        sys.exit(1)

    try:
        matched = cron_matches(args.expression, when)
    except ValueError as e:
        print(f"  Error: {e}")
        sys.exit(1)

    verdict = "matches" if matched else "does not match"
    print(f"  {when.isoformat(timespec='minutes')} {verdict} {args.expression!r}")
    if not matched:
        sys.exit(2)


def cmd_subnet(args: argparse.Namespace) -> None:
    """Print IPv4 subnet details."""
    from tools.subnet import compute_subnet

    try:
        info = compute_subnet(args.ip, args.mask)
    except ValueError as e:
        print(f"  Error: {e}")
        sys.exit(1)

    flags = [name.removeprefix("is_") for name, on in info.flags.model_dump().items() if on]
    print(f"  Address:   {info.ip}/{info.prefix} (class {info.address_class})")
    print(f"  Netmask:   {info.mask}")
    print(f"  Wildcard:  {info.wildcard}")
    print(f"  Network:   {info.network}")
    print(f"  Broadcast: {info.broadcast}")
    print(f"  Hosts:     {info.range} ({info.usable} usable of {info.total})")
    if flags:
        print(f"  Flags:     {', '.join(flags)}")


def cmd_url(args: argparse.Namespace) -> None:
    """Normalize a repository URL."""
    from tools.url import sanitize_url

    cleaned = sanitize_url(args.raw, infer_shorthand=not args.no_shorthand, keep_hash=not args.drop_hash)
    if cleaned is None:
        print("  Not a recognizable URL.")
        sys.exit(1)
    print(cleaned)


def cmd_licenses(args: argparse.Namespace) -> None:
    """Write the dependency license inventory."""
    from cli.licenses import write_inventory
    from main import setup_logging
    setup_logging("DEBUG" if args.debug else "INFO")

    out = args.out
    if out is None:
        from core.config import get_home_dir, load_config
        out = load_config(config_path=get_home_dir() / "config.yaml").licenses_path

    payload = write_inventory(out)
    print(f"  Wrote {payload.total} packages to {out}")
    for license_name, count in payload.by_license.items():
        print(f"    {license_name}: {count}")

    if args.print:
        print()
        for package in payload.packages:
            print(package.id)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="utilidesk",
        description="UtiliDesk -- small utility widgets behind a JSON API",
    )
    sub = parser.add_subparsers(dest="command")

    # serve
    serve_parser = sub.add_parser("serve", help="Start the widget server")
    serve_parser.add_argument("--config", "-c", type=str, default=None, help="Path to config.yaml")

    # status
    sub.add_parser("status", help="Show config and inventory status")

    # cron
    cron_parser = sub.add_parser("cron", help="Parse and describe a POSIX cron line")
    cron_parser.add_argument("expression", type=str, help='Cron line, e.g. "0 9 * * 1-5"')

    # cron-check
    check_parser = sub.add_parser("cron-check", help="Check whether a time matches a cron line")
    check_parser.add_argument("expression", type=str, help="Cron line")
    check_parser.add_argument("--at", type=str, default=None, help="ISO timestamp (default: now)")

    # subnet
    subnet_parser = sub.add_parser("subnet", help="IPv4 subnet calculator")
    subnet_parser.add_argument("ip", type=str, help="IPv4 address, e.g. 192.168.1.10")
    subnet_parser.add_argument("mask", type=str, help="Prefix (24, /24) or netmask (255.255.255.0)")

    # url
    url_parser = sub.add_parser("url", help="Normalize a repository URL")
    url_parser.add_argument("raw", type=str, help="URL, git remote or owner/repo shorthand")
    url_parser.add_argument("--no-shorthand", action="store_true", help="Do not treat owner/repo as GitHub")
    url_parser.add_argument("--drop-hash", action="store_true", help="Drop the #fragment")

    # licenses
    licenses_parser = sub.add_parser("licenses", help="Write the dependency license inventory")
    licenses_parser.add_argument("--out", type=str, default=None, help="Output JSON file")
    licenses_parser.add_argument("--print", action="store_true", help="Print every package id afterwards")
    licenses_parser.add_argument("--debug", action="store_true", help="Verbose logging")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    commands = {
        "serve": cmd_serve,
        "status": cmd_status,
        "cron": cmd_cron,
        "cron-check": cmd_cron_check,
        "subnet": cmd_subnet,
        "url": cmd_url,
        "licenses": cmd_licenses,
    }

    handler = commands.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
