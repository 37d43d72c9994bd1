"""Normalization of loose Java version specs into semantic-version ranges.

Accepted forms::

    "16"        any 16.y.z
    "16.x"      same as "16"
    "16.0"      any 16.0.z
    "16.0.2"    exactly 16.0.2, any build
    "16.0.2+7"  exactly 16.0.2+7
    "x"         anything (latest)

A trailing ``-ea`` (or an ``-ea.N`` build marker) requests early-access
builds instead of general-availability ones.
"""

import logging
import re
from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Union

import semantic_version

from .common.java import EA_BUILD_MARKER, EA_SUFFIX
from .errors import InvalidVersionSpec
from .model.java import AdoptiumReleaseType

logger = logging.getLogger(__name__)

WILDCARDS = ("x", "X", "*")

VERSION_SPEC_RE = re.compile(
    r"^(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*]))?"
    r"(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass(frozen=True)
class VersionRange:
    """A ``semantic_version.SimpleSpec`` expression plus the channel rule.

    General-availability ranges never match pre-releases. Early-access
    ranges match on the version with its pre-release tag removed.
    """

    expression: str = "*"
    include_prerelease: bool = False

    @cached_property
    def spec(self) -> semantic_version.SimpleSpec:
        return semantic_version.SimpleSpec(self.expression)

    def satisfies(self, candidate: Union[str, semantic_version.Version]) -> bool:
        if isinstance(candidate, str):
            candidate = semantic_version.Version(candidate)

        if candidate.prerelease:
            if not self.include_prerelease:
                return False
            candidate = semantic_version.Version(
                major=candidate.major,
                minor=candidate.minor,
                patch=candidate.patch,
                build=candidate.build,
            )
        return self.spec.match(candidate)

    def __str__(self):
        return self.expression


@dataclass(frozen=True)
class VersionSpec:
    raw: str
    version: str
    range: VersionRange
    stable: bool = True

    @property
    def release_type(self) -> AdoptiumReleaseType:
        if self.stable:
            return AdoptiumReleaseType.GeneralAvailability
        return AdoptiumReleaseType.EarlyAccess

    def satisfies(self, candidate: Union[str, semantic_version.Version]) -> bool:
        return self.range.satisfies(candidate)


def split_release_channel(token: str) -> tuple[str, bool]:
    """Strip an early-access marker, returning ``(version, stable)``."""
    if token.endswith(EA_SUFFIX):
        return token[: -len(EA_SUFFIX)], False
    if EA_BUILD_MARKER in token:
        return token.replace(EA_BUILD_MARKER, "+", 1), False
    return token, True


def _range_expression(token: str) -> str:
    """Turn a loose token into a SimpleSpec expression.

    "16" -> ">=16.0.0,<17.0.0", "16.0.2" -> "==16.0.2", "x" -> "*"
    """
    m = VERSION_SPEC_RE.match(token)
    if m is None:
        raise ValueError(token)

    components = [m.group("major"), m.group("minor"), m.group("patch")]
    build = m.group("build")

    numbers: list[int] = []
    for component in components:
        if component is None or component in WILDCARDS:
            break
        numbers.append(int(component))

    # nothing may follow a wildcard
    for component in components[len(numbers):]:
        if component is not None and component not in WILDCARDS:
            raise ValueError(token)

    if build is not None and len(numbers) < 3:
        raise ValueError(token)

    if not numbers:
        return "*"

    if len(numbers) == 3:
        exact = "%d.%d.%d" % tuple(numbers)
        if build is not None:
            exact = f"{exact}+{build}"
        return f"=={exact}"

    if len(numbers) == 1:
        major = numbers[0]
        return f">={major}.0.0,<{major + 1}.0.0"

    major, minor = numbers
    return f">={major}.{minor}.0,<{major}.{minor + 1}.0"


def normalize_version_spec(token: str) -> VersionSpec:
    raw = token
    version, stable = split_release_channel(token.strip())
    try:
        expression = _range_expression(version)
        semantic_version.SimpleSpec(expression)
    except ValueError:
        raise InvalidVersionSpec(raw) from None

    version_range = VersionRange(expression, include_prerelease=not stable)
    logger.debug("Normalized version spec '%s' to range '%s' (stable=%s)", raw, version_range, stable)
    return VersionSpec(raw=raw, version=version, range=version_range, stable=stable)


def release_sort_key(version: semantic_version.Version):
    """Total order over release versions.

    Core triple and pre-release tag follow semantic-version precedence; a
    numeric build (the ``+N`` part) breaks the remaining ties.
    """
    base = semantic_version.Version(
        major=version.major,
        minor=version.minor,
        patch=version.patch,
        prerelease=version.prerelease,
    )
    build = -1
    if version.build and version.build[0].isdigit():
        build = int(version.build[0])
    return base, build


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Unique versions, newest first."""
    unique = set(versions)
    return sorted(unique, key=lambda v: release_sort_key(semantic_version.Version(v)), reverse=True)
