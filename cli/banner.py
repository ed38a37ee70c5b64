"""ASCII art banner for the UtiliDesk CLI."""

BANNER = r"""
 _   _ _   _ _ _ ____            _
| | | | |_(_) (_)  _ \  ___  ___| | __
| | | | __| | | | | | |/ _ \/ __| |/ /
| |_| | |_| | | | |_| |  __/\__ \   <
 \___/ \__|_|_|_|____/ \___||___/_|\_\
"""

TAGLINE = "POSIX cron builder, IPv4 subnet calculator, URL sanitizer"


def print_banner() -> None:
    """Print the banner and tagline."""
    print(BANNER)
    print(f"  {TAGLINE}")
    print()
