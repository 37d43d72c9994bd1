from typing import Optional, Sequence


class JavaSetupError(Exception):
    pass


class InvalidVersionSpec(JavaSetupError):
    def __init__(self, version_spec: str):
        self.version_spec = version_spec
        super().__init__(
            f"The string '{version_spec}' is not valid SemVer notation for a Java version."
        )


class ManifestFetchError(JavaSetupError):
    """Fetching one page of the release catalog failed.

    ``status_code`` is ``None`` when no HTTP response was received at all
    (timeouts, connection errors, page ceiling reached).
    """

    def __init__(self, page: int, status_code: Optional[int], reason: str, url: Optional[str] = None):
        self.page = page
        self.status_code = status_code
        self.url = url
        message = f"Failed to fetch release manifest page {page}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        super().__init__(f"{message}: {reason}")


class NoSatisfiedVersion(JavaSetupError):
    MAX_LISTED_VERSIONS = 50

    def __init__(self, version_spec: str, available: Sequence[str] = ()):
        self.version_spec = version_spec
        self.available = list(available)
        message = f"Could not find satisfied version for SemVer '{version_spec}'."
        if self.available:
            listed = ", ".join(self.available[: self.MAX_LISTED_VERSIONS])
            message += f"\nAvailable versions: {listed}"
        super().__init__(message)
