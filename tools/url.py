"""Repository URL sanitizer.

Turns the many spellings package metadata uses for a source repository
(git+https, scp-style git@host:path, github:owner/repo, bare owner/repo,
git://, ssh://) into a plain https URL a browser can open.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

HTTPS_HOSTS = {"github.com", "gitlab.com", "bitbucket.org"}
PROVIDER_HOSTS = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
}

_SCP_RE = re.compile(r"^git@([^:]+):(.+)$", re.IGNORECASE)
_PROVIDER_RE = re.compile(r"^(github|gitlab|bitbucket):([^#]+)$", re.IGNORECASE)
_SHORTHAND_RE = re.compile(r"^[\w.-]+/[\w.-]+$")
_BARE_HOST_RE = re.compile(r"^(www\.|github\.com/|gitlab\.com/|bitbucket\.org/)", re.IGNORECASE)
_GIT_SUFFIX_RE = re.compile(r"\.git$", re.IGNORECASE)


def _strip_git(path: str) -> str:
    return _GIT_SUFFIX_RE.sub("", path)


def sanitize_url(
    raw: str | None,
    infer_shorthand: bool = True,
    keep_hash: bool = True,
) -> str | None:
    """Normalize a repository reference to an http(s) URL.

    Args:
        raw: anything found in a repository/homepage metadata field
        infer_shorthand: treat bare "owner/repo" as a GitHub repository
        keep_hash: keep the "#fragment" part of regular URLs

    Returns:
        The cleaned URL, or None when the input cannot be made into one.
    """
    if not raw:
        return None
    s = str(raw).strip()
    if not s:
        return None

    if s.startswith("git+"):
        s = s[4:]

    scp = _SCP_RE.match(s)
    if scp:
        return f"https://{scp.group(1)}/{_strip_git(scp.group(2))}"

    provider = _PROVIDER_RE.match(s)
    if provider:
        host = PROVIDER_HOSTS[provider.group(1).lower()]
        return f"https://{host}/{_strip_git(provider.group(2))}"

    if _SHORTHAND_RE.match(s):
        return f"https://github.com/{s}" if infer_shorthand else None

    if _BARE_HOST_RE.match(s):
        s = f"https://{s}"

    if s.lower().startswith("git://"):
        s = "https://" + s[6:]

    try:
        parts = urlsplit(s)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return None

    if not parts.scheme or not hostname:
        return None

    if parts.scheme.lower() == "ssh":
        return f"https://{hostname}/{_strip_git(parts.path.lstrip('/'))}"

    scheme = "https" if hostname in HTTPS_HOSTS else parts.scheme.lower()
    if scheme not in ("http", "https"):
        return None

    host = f"{hostname}:{port}" if port is not None else hostname
    path = _strip_git(parts.path) or "/"
    query = f"?{parts.query}" if parts.query else ""
    fragment = f"#{parts.fragment}" if keep_hash and parts.fragment else ""
    return f"{scheme}://{host}{path}{query}{fragment}"
