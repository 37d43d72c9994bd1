import logging
from abc import ABC, abstractmethod
from typing import Protocol

from ..model.java import InstallRequest, JavaInstallation, ResolvedPackage
from ..toolcache import ToolCache, toolcache_version_name
from ..versioning import normalize_version_spec

logger = logging.getLogger(__name__)


class PackageInstaller(Protocol):
    """Downloads and extracts a resolved package, returning the extracted path."""

    def install(self, package: ResolvedPackage) -> str: ...


class JavaBase(ABC):
    def __init__(self, request: InstallRequest):
        self.request = request

    @property
    @abstractmethod
    def toolcache_folder_name(self) -> str: ...

    @abstractmethod
    def find_package_for_download(self, version: str) -> ResolvedPackage: ...

    def setup_java(self, tool_cache: ToolCache, installer: PackageInstaller) -> JavaInstallation:
        spec = normalize_version_spec(self.request.version)
        key = self.toolcache_folder_name

        if not self.request.check_latest:
            path = tool_cache.find(key, spec.version)
            if path is not None:
                logger.info("Resolved Java %s from tool cache at %s", spec.raw, path)
                return JavaInstallation(version=spec.version, path=path, from_cache=True)
            logger.info("Java %s was not found in tool cache", spec.raw)

        package = self.find_package_for_download(self.request.version)
        logger.info("Trying to download Java %s from %s", package.version, package.url)
        extracted = installer.install(package)

        version_name = toolcache_version_name(package.version, spec.stable)
        path = tool_cache.store(key, version_name, extracted)
        logger.info("Java %s was installed to %s", package.version, path)
        return JavaInstallation(version=package.version, path=path)
