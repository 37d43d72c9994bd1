from datetime import datetime
from enum import Enum, StrEnum
from typing import Any, Optional
from urllib.parse import quote, urlencode, urlparse, urlunparse

import semantic_version
from pydantic import ConfigDict, Field, field_validator

from . import MetaBase, MetaList
from ..common import ADOPTIUM_API_BASE
from ..common.java import ADOPTIUM_PAGE_SIZE, ADOPTIUM_VERSION_RANGE
from ..common.platform import host_architecture, translate_arch


class JavaPackageType(StrEnum):
    Jre = "jre"
    Jdk = "jdk"


class InstallRequest(MetaBase):
    model_config = ConfigDict(frozen=True)

    version: str
    architecture: str = Field(None, validate_default=True)
    package_type: JavaPackageType = Field(JavaPackageType.Jdk, alias="packageType")
    check_latest: bool = Field(False, alias="checkLatest")

    @field_validator("architecture", mode="before")
    @classmethod
    def architecture_must_be_known(cls, v):
        if v is None:
            v = host_architecture()
        if v is None:
            raise ValueError("host architecture is not supported, pass one explicitly")
        arch = translate_arch(str(v))
        if arch is None:
            raise ValueError(f"unsupported architecture '{v}'")
        return arch


class APIQuery(MetaBase):
    def to_query(self):
        set_parts: dict[str, Any] = {}
        for key, value in self.model_dump().items():
            if value is not None:
                if isinstance(value, Enum):
                    set_parts[key] = value.value
                else:
                    set_parts[key] = value
        return urlencode(set_parts)


class AdoptiumJvmImpl(StrEnum):
    Hotspot = "hotspot"
    OpenJ9 = "openj9"

    @property
    def display_name(self) -> str:
        return ADOPTIUM_JVM_IMPL_NAMES[self]


ADOPTIUM_JVM_IMPL_NAMES = {
    AdoptiumJvmImpl.Hotspot: "Hotspot",
    AdoptiumJvmImpl.OpenJ9: "OpenJ9",
}


class AdoptiumVendor(StrEnum):
    Adoptium = "adoptium"
    Eclipse = "eclipse"


class AdoptiumArchitecture(StrEnum):
    X64 = "x64"
    X86 = "x86"
    X32 = "x32"
    Ppc64 = "ppc64"
    Ppc64le = "ppc64le"
    S390x = "s390x"
    Aarch64 = "aarch64"
    Arm = "arm"
    Sparcv9 = "sparcv9"
    Riscv64 = "riscv64"


class AdoptiumReleaseType(StrEnum):
    GeneralAvailability = "ga"
    EarlyAccess = "ea"


class AdoptiumSortMethod(StrEnum):
    Default = "DEFAULT"
    Date = "DATE"


class AdoptiumSortOrder(StrEnum):
    Asc = "ASC"
    Desc = "DESC"


class AdoptiumImageType(StrEnum):
    Jdk = "jdk"
    Jre = "jre"
    Testimage = "testimage"
    Debugimage = "debugimage"
    Staticlibs = "staticlibs"
    Sources = "sources"
    Sbom = "sbom"


class AdoptiumHeapSize(StrEnum):
    Normal = "normal"
    Large = "large"


class AdoptiumProject(StrEnum):
    Jdk = "jdk"
    Valhalla = "valhalla"
    Metropolis = "metropolis"
    Jfr = "jfr"
    Shenandoah = "shenandoah"


class AdoptiumCLib(StrEnum):
    Musl = "musl"
    Glibc = "glibc"


ADOPTIUM_API_ASSETS_VERSION = "{api_base}/v3/assets/version/{version_range}"


class AdoptiumAssetsVersionQuery(APIQuery):
    # field order is the order of the parameters on the wire
    project: Optional[AdoptiumProject] = AdoptiumProject.Jdk
    vendor: Optional[AdoptiumVendor] = AdoptiumVendor.Adoptium
    heap_size: Optional[AdoptiumHeapSize] = AdoptiumHeapSize.Normal
    sort_method: Optional[AdoptiumSortMethod] = AdoptiumSortMethod.Default
    sort_order: Optional[AdoptiumSortOrder] = AdoptiumSortOrder.Desc
    os: Optional[str] = None
    architecture: Optional[AdoptiumArchitecture] = None
    image_type: Optional[AdoptiumImageType] = None
    release_type: Optional[AdoptiumReleaseType] = AdoptiumReleaseType.GeneralAvailability
    jvm_impl: Optional[AdoptiumJvmImpl] = None
    page_size: int = ADOPTIUM_PAGE_SIZE
    page: int = 0


def adoptiumAPIAssetsVersionUrl(
    query: AdoptiumAssetsVersionQuery,
    version_range: str = ADOPTIUM_VERSION_RANGE,
    api_base: str = ADOPTIUM_API_BASE,
):
    url = urlparse(
        ADOPTIUM_API_ASSETS_VERSION.format(
            api_base=api_base,
            version_range=quote(version_range, safe=","),
        )
    )
    return urlunparse(url._replace(query=query.to_query()))


class AdoptiumFile(MetaBase):
    name: str
    link: str
    size: Optional[int] = None


class AdoptiumPackage(AdoptiumFile):
    checksum: Optional[str] = None
    checksum_link: Optional[str] = None
    signature_link: Optional[str] = None
    metadata_link: Optional[str] = None
    # we intentionally omit download_count


class AdoptiumBinary(MetaBase):
    os: str
    architecture: AdoptiumArchitecture
    image_type: AdoptiumImageType
    c_lib: Optional[AdoptiumCLib] = None
    jvm_impl: AdoptiumJvmImpl
    package: Optional[AdoptiumPackage] = None
    installer: Optional[AdoptiumPackage] = None
    heap_size: AdoptiumHeapSize
    updated_at: Optional[datetime] = None
    scm_ref: Optional[str] = None
    project: AdoptiumProject = AdoptiumProject.Jdk
    # we intentionally omit download_count


class AdoptiumVersion(MetaBase):
    major: Optional[int] = None
    minor: Optional[int] = None
    security: Optional[int] = None
    patch: Optional[int] = None
    pre: Optional[str] = None
    adopt_build_number: Optional[int] = None
    semver: str
    openjdk_version: Optional[str] = None
    build: Optional[int] = None
    optional: Optional[str] = None

    @field_validator("semver")
    @classmethod
    def semver_must_parse(cls, v):
        semantic_version.Version(v)
        return v


class AdoptiumRelease(MetaBase):
    release_id: str = Field(alias="id")
    release_link: Optional[str] = None
    release_name: str
    timestamp: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    binaries: list[AdoptiumBinary]
    release_type: AdoptiumReleaseType
    vendor: AdoptiumVendor
    version_data: AdoptiumVersion
    source: Optional[AdoptiumFile] = None
    release_notes: Optional[AdoptiumFile] = None
    # we intentionally omit download_count

    @property
    def version(self) -> semantic_version.Version:
        return semantic_version.Version(self.version_data.semver)


class AdoptiumReleases(MetaList):
    root: list[AdoptiumRelease]


class ResolvedPackage(MetaBase):
    version: str
    release_name: str
    url: str
    checksum: Optional[str] = None
    checksum_link: Optional[str] = None
    size: Optional[int] = None
    binary: AdoptiumBinary

    @classmethod
    def from_release_binary(cls, rls: AdoptiumRelease, binary: AdoptiumBinary):
        if binary.package is None:
            raise ValueError(f"binary for {rls.release_name} has no downloadable package")

        return cls(
            version=rls.version_data.semver,
            release_name=rls.release_name,
            url=binary.package.link,
            checksum=binary.package.checksum,
            checksum_link=binary.package.checksum_link,
            size=binary.package.size,
            binary=binary,
        )


class JavaInstallation(MetaBase):
    version: str
    path: str
    from_cache: bool = Field(False, alias="fromCache")
