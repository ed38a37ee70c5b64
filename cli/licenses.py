"""Dependency license inventory -- builds the /licenses.json payload.

Walks every distribution installed in the current environment, pulls the
declared license and project links out of its metadata, and writes one
JSON document the licenses page can render. Meant to run at build time:

    utilidesk licenses --out static/licenses.json
"""

from __future__ import annotations

import logging
from collections import Counter
from importlib import metadata
from pathlib import Path
from typing import Iterable

from core.models.licenses import LicensePackage, LicensesPayload
from tools.url import sanitize_url

logger = logging.getLogger(__name__)

# Project-URL labels that point at source code, most specific first
REPOSITORY_LABELS = ("repository", "source", "source code", "code", "github", "homepage")

# Free-text License fields longer than this are the license body, not its name
_MAX_LICENSE_NAME = 80


def _license_of(meta) -> str:
    """Best-effort license name from core metadata."""
    expression = (meta.get("License-Expression") or "").strip()
    if expression:
        return expression

    declared = (meta.get("License") or "").strip()
    if declared and declared.upper() != "UNKNOWN" and len(declared) <= _MAX_LICENSE_NAME and "\n" not in declared:
        return declared

    for classifier in meta.get_all("Classifier") or []:
        if classifier.startswith("License ::"):
            name = classifier.split("::")[-1].strip()
            if name and name != "OSI Approved":
                return name

    return "UNKNOWN"


def _project_urls(meta) -> dict[str, str]:
    """Project-URL entries keyed by lowercased label ("Source, https://..." form)."""
    urls: dict[str, str] = {}
    for entry in meta.get_all("Project-URL") or []:
        label, _, url = entry.partition(",")
        if url.strip():
            urls[label.strip().lower()] = url.strip()
    return urls


def package_from_metadata(meta) -> LicensePackage | None:
    """Build a LicensePackage from a distribution's metadata, or None if it has no name."""
    name = (meta.get("Name") or "").strip()
    if not name:
        return None

    urls = _project_urls(meta)
    repository = None
    for label in REPOSITORY_LABELS:
        repository = sanitize_url(urls.get(label))
        if repository:
            break

    home_page = (meta.get("Home-page") or "").strip() or urls.get("homepage")

    return LicensePackage(
        name=name,
        version=(meta.get("Version") or "").strip() or "0",
        license=_license_of(meta),
        repository=repository,
        url=sanitize_url(home_page, infer_shorthand=False),
        publisher=(meta.get("Author") or meta.get("Maintainer") or "").strip() or None,
        email=(meta.get("Author-email") or meta.get("Maintainer-email") or "").strip() or None,
    )


def collect_packages(distributions: Iterable[metadata.Distribution] | None = None) -> list[LicensePackage]:
    """Inventory installed distributions, deduplicated by name@version."""
    if distributions is None:
        distributions = metadata.distributions()

    seen: dict[str, LicensePackage] = {}
    for dist in distributions:
        try:
            package = package_from_metadata(dist.metadata)
        except Exception as e:
            logger.warning("Skipping distribution with unreadable metadata: %s", e)
            continue
        if package is None:
            continue
        seen.setdefault(package.id.lower(), package)

    packages = sorted(seen.values(), key=lambda p: (p.name.lower(), p.version))
    logger.debug("Collected %d packages", len(packages))
    return packages


def build_payload(packages: list[LicensePackage]) -> LicensesPayload:
    by_license = Counter(p.license for p in packages)
    return LicensesPayload(
        total=len(packages),
        by_license=dict(sorted(by_license.items(), key=lambda item: (-item[1], item[0]))),
        packages=packages,
    )


def write_inventory(out_path: str | Path, packages: list[LicensePackage] | None = None) -> LicensesPayload:
    """Collect (unless given) and write the inventory JSON to out_path."""
    if packages is None:
        packages = collect_packages()

    payload = build_payload(packages)
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(payload.model_dump_json(indent=2) + "\n")
    logger.info("Wrote %d packages (%d licenses) to %s", payload.total, len(payload.by_license), out_path)
    return payload
