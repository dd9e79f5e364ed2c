"""Infer application IDs and default Gradle tasks from an app module's build file."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from itertools import groupby
from pathlib import Path

_BUILD_FILE_NAMES = ("build.gradle", "build.gradle.kts")

_APP_ID_PATTERNS = (
    re.compile(r"""(?i)applicationId\s+["']([^"']+)["']"""),
    re.compile(r"""(?i)applicationId\s*=\s*["']([^"']+)["']"""),
)
_SUFFIX_PATTERNS = (
    re.compile(r"""(?i)applicationIdSuffix\s*=\s*["']([^"']*)["']"""),
    re.compile(r"""(?i)applicationIdSuffix\s+["']([^"']*)["']"""),
)
_DIMENSIONS = re.compile(r"(?m)flavorDimensions\s*[\(+\s]*(?:listOf\s*\()?([\s\S]*?)[\)\n]")
_QUOTED = re.compile(r"""["']([^"']+)["']""")
_CREATE = re.compile(r"""create\s*\(\s*["']([^"']+)["']\s*\)""")
_BLOCK = re.compile(r"(?m)^\s{2,}([a-zA-Z_][a-zA-Z0-9_]*)\s*\{")
_DIMENSION_ASSIGN = re.compile(r"""dimension\s*[=\s]*["']([^"']+)["']""")

_NON_FLAVOR_BLOCKS = frozenset(
    {
        "defaultConfig",
        "buildTypes",
        "create",
        "dimension",
        "productFlavors",
        "signingConfigs",
        "kotlinOptions",
        "packagingOptions",
        "packaging",
        "compileOptions",
        "buildFeatures",
        "android",
        "dependencies",
    }
)


@dataclass
class ProjectInference:
    """What could be inferred about an Android app module."""

    application_ids: list[str] = field(default_factory=list)
    flavor_names: list[str] = field(default_factory=list)
    flavor_dimensions: list[str] = field(default_factory=list)
    # First flavor (alphabetically) chosen per dimension: (dimension, flavor).
    selected_flavors: list[tuple[str, str]] = field(default_factory=list)
    assemble_task: str | None = None
    install_task: str | None = None
    variant_summary: str = ""
    gradle_file: Path | None = None


def find_app_gradle(project_root: str | Path) -> Path | None:
    """Locate the application module's build file under the project root."""
    root = Path(project_root)
    for candidate in (root / "app" / "build.gradle", root / "app" / "build.gradle.kts"):
        if candidate.is_file():
            return candidate
    try:
        subdirs = sorted(p for p in root.iterdir() if p.is_dir())
    except OSError:
        return None
    for subdir in subdirs:
        for name in _BUILD_FILE_NAMES:
            build_file = subdir / name
            if not build_file.is_file():
                continue
            try:
                text = build_file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            if "com.android.application" in text:
                return build_file
    return None


def infer_project(project_root: str | Path) -> ProjectInference:
    """Infer application IDs and tasks from the project's app module."""
    gradle_path = find_app_gradle(project_root)
    if gradle_path is None:
        return ProjectInference(variant_summary="no app/build.gradle")
    inference = infer_from_gradle_text(gradle_path.read_text(encoding="utf-8"))
    inference.gradle_file = gradle_path
    return inference


def infer_from_gradle_text(text: str) -> ProjectInference:
    """Infer application IDs, flavors and default tasks from build file text."""
    base = _extract_application_id(text) or ""
    suffixes = _extract_application_id_suffixes(text)
    dimensions = _extract_flavor_dimensions(text)
    flavor_map = _extract_flavors_with_dimensions(text, dimensions)

    flavor_names = sorted(flavor_map)

    selected: list[tuple[str, str]] = []
    if not dimensions:
        if flavor_names:
            selected.append(("", flavor_names[0]))
    else:
        for dim in dimensions:
            in_dim = sorted(name for name, d in flavor_map.items() if d == dim)
            if in_dim:
                selected.append((dim, in_dim[0]))

    segment = "".join(_capitalize(flavor) for _, flavor in selected)
    if segment:
        assemble_task = f"assemble{segment}Debug"
        install_task = f"install{segment}Debug"
        summary = f"{segment}Debug"
    else:
        assemble_task = "assembleDebug"
        install_task = "installDebug"
        summary = "debug (no flavors)"

    application_ids: list[str] = []
    if base:
        application_ids.append(base)
        for suffix in suffixes:
            app_id = _join_suffix(base, suffix)
            if app_id not in application_ids:
                application_ids.append(app_id)

    return ProjectInference(
        application_ids=application_ids,
        flavor_names=flavor_names,
        flavor_dimensions=dimensions,
        selected_flavors=selected,
        assemble_task=assemble_task,
        install_task=install_task,
        variant_summary=summary,
    )


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def _join_suffix(base: str, suffix: str) -> str:
    if not suffix:
        return base
    if suffix.startswith("."):
        return base + suffix
    return f"{base}.{suffix}"


def _extract_application_id(text: str) -> str | None:
    start = text.find("defaultConfig")
    search = text[start : start + 8_000] if start >= 0 else text
    for pattern in _APP_ID_PATTERNS:
        match = pattern.search(search)
        if match:
            return match.group(1)
    return None


def _extract_application_id_suffixes(text: str) -> list[str]:
    found = {m.group(1) for pattern in _SUFFIX_PATTERNS for m in pattern.finditer(text)}
    return sorted(found)


def _extract_flavor_dimensions(text: str) -> list[str]:
    """Parse `flavorDimensions "a", "b"` or `flavorDimensions("a", "b")`."""
    match = _DIMENSIONS.search(text)
    if not match:
        return []
    found = [m.group(1) for m in _QUOTED.finditer(match.group(1))]
    return [name for name, _ in groupby(found)]


def _extract_flavors_with_dimensions(text: str, dimensions: list[str]) -> dict[str, str]:
    """Map each flavor name to its dimension (empty when unassigned)."""
    start = text.find("productFlavors")
    if start < 0:
        return {}
    region = text[start : start + 24_000]
    flavors: dict[str, str] = {}

    for match in _CREATE.finditer(region):
        flavors.setdefault(match.group(1), "")
    for match in _BLOCK.finditer(region):
        name = match.group(1)
        if name not in _NON_FLAVOR_BLOCKS:
            flavors.setdefault(name, "")

    if not flavors or not dimensions:
        return flavors

    for name in flavors:
        body_start = _find_flavor_block_start(region, name)
        if body_start is None:
            continue
        assigned = _DIMENSION_ASSIGN.search(region[body_start : body_start + 2_000])
        if assigned:
            flavors[name] = assigned.group(1)
    return flavors


def _find_flavor_block_start(text: str, name: str) -> int | None:
    """Return the index just past the opening brace of a flavor's block."""
    for pattern in (f"{name} {{", f"{name}{{", f'("{name}")'):
        pos = text.find(pattern)
        if pos >= 0:
            brace = text.find("{", pos)
            if brace >= 0:
                return brace + 1
    return None