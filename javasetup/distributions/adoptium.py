import logging
import time
from typing import Callable, Iterable, Iterator, Optional

import pydantic
import requests

from .base import JavaBase
from .. import common
from ..common import adoptium_api_base, default_session, http_timeout
from ..common.http import get_json
from ..common.java import ADOPTIUM_PAGE_SIZE
from ..common.platform import host_os
from ..errors import ManifestFetchError, NoSatisfiedVersion
from ..model.java import (
    AdoptiumAssetsVersionQuery,
    AdoptiumJvmImpl,
    AdoptiumRelease,
    AdoptiumReleases,
    AdoptiumReleaseType,
    InstallRequest,
    JavaPackageType,
    ResolvedPackage,
    adoptiumAPIAssetsVersionUrl,
)
from ..toolcache import toolcache_key
from ..versioning import VersionRange, normalize_version_spec, sort_versions, split_release_channel

logger = logging.getLogger(__name__)


class AdoptiumManifestFetcher:
    """Walks the Adoptium ``assets/version`` catalog page by page.

    Pages are requested strictly in order, newest release first, until the
    service answers with an empty page.
    """

    def __init__(
        self,
        sess: Optional[requests.Session] = None,
        platform_resolver: Optional[Callable[[], str]] = None,
        api_base: Optional[str] = None,
        page_size: int = ADOPTIUM_PAGE_SIZE,
        max_pages: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.sess = sess if sess is not None else default_session()
        self.platform_resolver = platform_resolver or host_os
        self.api_base = api_base or adoptium_api_base()
        self.page_size = page_size
        self.max_pages = max_pages if max_pages is not None else common.max_pages()
        self.timeout = timeout if timeout is not None else http_timeout()

    def build_url(self, request: InstallRequest, implementation: AdoptiumJvmImpl, page: int) -> str:
        _, stable = split_release_channel(request.version.strip())
        release_type = AdoptiumReleaseType.GeneralAvailability if stable else AdoptiumReleaseType.EarlyAccess

        query = AdoptiumAssetsVersionQuery(
            os=self.platform_resolver(),
            architecture=request.architecture,
            image_type=str(request.package_type),
            release_type=release_type,
            jvm_impl=implementation,
            page_size=self.page_size,
            page=page,
        )
        return adoptiumAPIAssetsVersionUrl(query, api_base=self.api_base)

    def iter_pages(self, request: InstallRequest, implementation: AdoptiumJvmImpl) -> Iterator[list[AdoptiumRelease]]:
        page = 0
        while True:
            if self.max_pages is not None and page >= self.max_pages:
                raise ManifestFetchError(page, None, f"catalog has more than {self.max_pages} pages")

            url = self.build_url(request, implementation, page)
            logger.debug("Gathering available versions from '%s'", url)
            releases = self._fetch_page(url, page)
            if not releases:
                break

            logger.debug("Page %d: %d releases", page, len(releases))
            yield releases
            page += 1

    def fetch_catalog(self, request: InstallRequest, implementation: AdoptiumJvmImpl) -> list[AdoptiumRelease]:
        started = time.monotonic()
        catalog: list[AdoptiumRelease] = []
        for releases in self.iter_pages(request, implementation):
            catalog.extend(releases)

        logger.info(
            "Retrieved %d available versions in %.2fs",
            len(catalog),
            time.monotonic() - started,
        )
        return catalog

    def _fetch_page(self, url: str, page: int) -> list[AdoptiumRelease]:
        try:
            status_code, payload = get_json(self.sess, url, timeout=self.timeout)
        except ValueError as e:
            raise ManifestFetchError(page, 200, f"malformed JSON body: {e}", url) from e
        except requests.RequestException as e:
            raise ManifestFetchError(page, None, str(e), url) from e

        if status_code == 404:
            logger.debug("Page %d not found, end of catalog", page)
            return []
        if status_code != 200:
            raise ManifestFetchError(page, status_code, "unexpected response status", url)
        if not isinstance(payload, list):
            raise ManifestFetchError(page, status_code, "expected a JSON array of releases", url)

        try:
            return AdoptiumReleases.model_validate(payload).root
        except pydantic.ValidationError as e:
            raise ManifestFetchError(page, status_code, f"malformed release entry: {e}", url) from e


def select_best_match(
    catalog: Iterable[AdoptiumRelease],
    version_range: VersionRange,
    architecture: str,
    package_type: JavaPackageType,
    version_spec: str,
) -> ResolvedPackage:
    """Pick the first catalog entry within ``version_range``.

    Only the first matching entry is considered: if it has no binary for
    ``architecture``/``package_type`` the selection fails instead of
    falling back to an older release.
    """
    catalog = list(catalog)
    for rls in catalog:
        if not version_range.satisfies(rls.version):
            continue

        for binary in rls.binaries:
            if (
                str(binary.architecture) == str(architecture)
                and str(binary.image_type) == str(package_type)
                and binary.package is not None
            ):
                return ResolvedPackage.from_release_binary(rls, binary)

        logger.warning(
            "Release %s matches '%s' but has no %s %s binary",
            rls.version_data.semver,
            version_spec,
            architecture,
            package_type,
        )
        break

    raise NoSatisfiedVersion(version_spec, sort_versions(rls.version_data.semver for rls in catalog))


class AdoptiumDistribution(JavaBase):
    def __init__(
        self,
        request: InstallRequest,
        implementation: AdoptiumJvmImpl = AdoptiumJvmImpl.Hotspot,
        fetcher: Optional[AdoptiumManifestFetcher] = None,
    ):
        super().__init__(request)
        self.implementation = AdoptiumJvmImpl(implementation)
        self._fetcher = fetcher

    @property
    def fetcher(self) -> AdoptiumManifestFetcher:
        if self._fetcher is None:
            self._fetcher = AdoptiumManifestFetcher()
        return self._fetcher

    @property
    def toolcache_folder_name(self) -> str:
        return toolcache_key(self.implementation, self.request.package_type)

    def get_available_versions(self) -> list[AdoptiumRelease]:
        return self.fetcher.fetch_catalog(self.request, self.implementation)

    def find_package_for_download(self, version: str) -> ResolvedPackage:
        spec = normalize_version_spec(version)
        catalog = self.get_available_versions()
        package = select_best_match(
            catalog,
            spec.range,
            self.request.architecture,
            self.request.package_type,
            version,
        )
        logger.info("Resolved Java %s to %s (%s)", version, package.version, package.release_name)
        return package
