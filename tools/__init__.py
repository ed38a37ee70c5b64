"""Small standalone widgets: IPv4 subnet calculator and URL sanitizer."""

from tools.subnet import compute_subnet
from tools.url import sanitize_url

__all__ = ["compute_subnet", "sanitize_url"]
