import json
import os
from unittest.mock import MagicMock

import pytest

from javasetup.model.java import AdoptiumRelease, AdoptiumReleases

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in list(os.environ):
        if name.startswith("JAVASETUP_"):
            monkeypatch.delenv(name)


@pytest.fixture
def manifest_data():
    with open(os.path.join(DATA_DIR, "adoptium.json")) as f:
        return json.load(f)


@pytest.fixture
def catalog(manifest_data):
    return list(AdoptiumReleases.model_validate(manifest_data))


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def session_with_pages():
    """A stand-in ``requests.Session`` answering with the given pages in order."""

    def factory(*pages):
        sess = MagicMock()
        sess.get.side_effect = [make_response(200, page) for page in pages]
        return sess

    return factory


@pytest.fixture
def make_release():
    def factory(semver, binaries=True, architecture="x64", image_type="jdk"):
        data = {
            "id": f"release-{semver}",
            "release_name": f"jdk-{semver}",
            "release_type": "ga",
            "vendor": "adoptium",
            "version_data": {"semver": semver},
            "binaries": [],
        }
        if binaries:
            data["binaries"].append(
                {
                    "os": "linux",
                    "architecture": architecture,
                    "image_type": image_type,
                    "jvm_impl": "hotspot",
                    "heap_size": "normal",
                    "package": {
                        "name": f"OpenJDK-{semver}.tar.gz",
                        "link": f"https://example.invalid/OpenJDK-{semver}.tar.gz",
                        "checksum": "0" * 64,
                        "size": 1,
                    },
                }
            )
        return AdoptiumRelease.model_validate(data)

    return factory
