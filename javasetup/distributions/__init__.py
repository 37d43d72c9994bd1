from .base import JavaBase, PackageInstaller
from .adoptium import AdoptiumDistribution, AdoptiumManifestFetcher, select_best_match

__all__ = [
    "JavaBase",
    "PackageInstaller",
    "AdoptiumDistribution",
    "AdoptiumManifestFetcher",
    "select_best_match",
]
