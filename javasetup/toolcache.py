from typing import Optional, Protocol

from .common.java import ADOPTIUM_VENDOR_NAME, EA_BUILD_MARKER, EA_SUFFIX, TOOLCACHE_NAMESPACE
from .model.java import AdoptiumJvmImpl, JavaPackageType


class ToolCache(Protocol):
    """Where installed JDKs live, keyed by :func:`toolcache_key` and a version."""

    def find(self, key: str, version_spec: str) -> Optional[str]: ...

    def store(self, key: str, version: str, path: str) -> str: ...


def toolcache_key(implementation: AdoptiumJvmImpl, package_type: JavaPackageType) -> str:
    impl = AdoptiumJvmImpl(implementation)
    return f"{TOOLCACHE_NAMESPACE}_{ADOPTIUM_VENDOR_NAME}-{impl.display_name}_{JavaPackageType(package_type)}"


def toolcache_version_name(version: str, stable: bool = True) -> str:
    # a "+" in the install path breaks some JVM tooling
    if not stable:
        if "+" in version:
            return version.replace("+", EA_BUILD_MARKER, 1)
        return version + EA_SUFFIX
    return version.replace("+", "-")
