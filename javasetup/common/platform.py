import platform
import sys
from typing import Optional

ADOPTIUM_ARCHITECTURES = [
    "x64",
    "x86",
    "aarch64",
    "arm",
    "ppc64",
    "ppc64le",
    "s390x",
    "riscv64",
    "sparcv9",
]

ADOPTIUM_ARCHITECTURE_TRANSLATIONS = {
    "x86_64": "x64",
    "amd64": "x64",
    "i386": "x86",
    "i686": "x86",
    "ia32": "x86",
    "x32": "x86",
    "arm64": "aarch64",
    "armv7l": "arm",
    "armv7": "arm",
}


def translate_arch(arch: str) -> Optional[str]:
    arch = arch.lower()
    if arch in ADOPTIUM_ARCHITECTURES:
        return arch
    elif arch in ADOPTIUM_ARCHITECTURE_TRANSLATIONS:
        return ADOPTIUM_ARCHITECTURE_TRANSLATIONS[arch]
    else:
        return None


def translate_os(system: str) -> str:
    system = system.lower()
    if system.startswith("darwin") or system.startswith("mac"):
        return "mac"
    if system.startswith("win") or system.startswith("cygwin"):
        return "windows"
    if system.startswith("aix"):
        return "aix"
    if system.startswith("sunos") or system.startswith("solaris"):
        return "solaris"
    return "linux"


def host_os() -> str:
    """Adoptium ``os`` token for the machine we are running on."""
    return translate_os(sys.platform)


def host_architecture() -> Optional[str]:
    return translate_arch(platform.machine())
