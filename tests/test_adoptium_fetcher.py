from unittest.mock import MagicMock, call

import pytest
import requests

from javasetup.distributions.adoptium import AdoptiumManifestFetcher
from javasetup.errors import ManifestFetchError
from javasetup.model.java import AdoptiumJvmImpl, InstallRequest

from conftest import make_response

BASE_URL = "https://api.adoptium.net/v3/assets/version/%5B1.0,100.0%5D"
FIXED_PARAMETERS = "project=jdk&vendor=adoptium&heap_size=normal&sort_method=DEFAULT&sort_order=DESC"


def make_fetcher(sess, **kwargs):
    kwargs.setdefault("platform_resolver", lambda: "mac")
    kwargs.setdefault("timeout", 5)
    return AdoptiumManifestFetcher(sess=sess, **kwargs)


@pytest.mark.parametrize(
    "request_args,expected_parameters",
    [
        (
            dict(version="16", architecture="x64", package_type="jdk"),
            "os=mac&architecture=x64&image_type=jdk&release_type=ga&jvm_impl=hotspot&page_size=20&page=0",
        ),
        (
            dict(version="16", architecture="x86", package_type="jdk"),
            "os=mac&architecture=x86&image_type=jdk&release_type=ga&jvm_impl=hotspot&page_size=20&page=0",
        ),
        (
            dict(version="16", architecture="x64", package_type="jre"),
            "os=mac&architecture=x64&image_type=jre&release_type=ga&jvm_impl=hotspot&page_size=20&page=0",
        ),
        (
            dict(version="16-ea", architecture="x64", package_type="jdk"),
            "os=mac&architecture=x64&image_type=jdk&release_type=ea&jvm_impl=hotspot&page_size=20&page=0",
        ),
    ],
)
def test_builds_correct_url(session_with_pages, request_args, expected_parameters):
    sess = session_with_pages([])
    fetcher = make_fetcher(sess)

    catalog = fetcher.fetch_catalog(InstallRequest(**request_args), AdoptiumJvmImpl.Hotspot)

    assert catalog == []
    assert sess.get.call_args_list == [
        call(f"{BASE_URL}?{FIXED_PARAMETERS}&{expected_parameters}", timeout=5)
    ]


def test_query_contains_each_parameter_once():
    fetcher = make_fetcher(MagicMock())
    url = fetcher.build_url(InstallRequest(version="21-ea", architecture="aarch64"), AdoptiumJvmImpl.OpenJ9, 3)

    query = url.split("?", 1)[1]
    names = [part.split("=", 1)[0] for part in query.split("&")]
    assert sorted(names) == sorted(
        [
            "project",
            "vendor",
            "heap_size",
            "sort_method",
            "sort_order",
            "os",
            "architecture",
            "image_type",
            "release_type",
            "jvm_impl",
            "page_size",
            "page",
        ]
    )
    assert "release_type=ea" in query
    assert "jvm_impl=openj9" in query
    assert query.endswith("page=3")


def test_loads_all_pages_until_empty(session_with_pages, manifest_data):
    sess = session_with_pages(manifest_data, manifest_data, [])
    fetcher = make_fetcher(sess)

    catalog = fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)

    assert len(catalog) == len(manifest_data) * 2
    assert sess.get.call_count == 3
    pages = [c.args[0].rsplit("page=", 1)[1] for c in sess.get.call_args_list]
    assert pages == ["0", "1", "2"]


def test_catalog_keeps_page_order(session_with_pages, manifest_data):
    sess = session_with_pages(manifest_data[:2], manifest_data[2:], [])
    fetcher = make_fetcher(sess)

    catalog = fetcher.fetch_catalog(InstallRequest(version="x", architecture="x64"), AdoptiumJvmImpl.Hotspot)

    assert [rls.version_data.semver for rls in catalog] == [e["version_data"]["semver"] for e in manifest_data]


def test_iter_pages_is_lazy(session_with_pages, manifest_data):
    sess = session_with_pages(manifest_data, manifest_data, [])
    fetcher = make_fetcher(sess)

    pages = fetcher.iter_pages(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)
    first = next(pages)

    assert len(first) == len(manifest_data)
    assert sess.get.call_count == 1



def test_not_found_past_last_page_ends_catalog(manifest_data):
    sess = MagicMock()
    sess.get.side_effect = [make_response(200, manifest_data), make_response(404)]
    fetcher = make_fetcher(sess)

    catalog = fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)

    assert len(catalog) == len(manifest_data)
    assert sess.get.call_count == 2


def test_not_found_on_first_page_is_empty_catalog():
    sess = MagicMock()
    sess.get.side_effect = [make_response(404)]
    fetcher = make_fetcher(sess)

    assert fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot) == []
    assert sess.get.call_count == 1


@pytest.mark.parametrize("status_code", [400, 403, 500, 503])
def test_non_200_status_fails(status_code):
    sess = MagicMock()
    sess.get.side_effect = [make_response(status_code)]
    fetcher = make_fetcher(sess)

    with pytest.raises(ManifestFetchError) as excinfo:
        fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)

    assert excinfo.value.page == 0
    assert excinfo.value.status_code == status_code


def test_failure_on_later_page_aborts_without_partial_result(manifest_data):
    sess = MagicMock()
    sess.get.side_effect = [make_response(200, manifest_data), make_response(502)]
    fetcher = make_fetcher(sess)

    with pytest.raises(ManifestFetchError) as excinfo:
        fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)

    assert excinfo.value.page == 1
    assert excinfo.value.status_code == 502
    assert "page 1" in str(excinfo.value)


def test_malformed_json_fails():
    response = make_response(200)
    response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    sess = MagicMock()
    sess.get.return_value = response
    fetcher = make_fetcher(sess)

    with pytest.raises(ManifestFetchError, match="malformed JSON"):
        fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)


@pytest.mark.parametrize("payload", [{"releases": []}, "nope", None])
def test_non_array_body_fails(payload):
    sess = MagicMock()
    sess.get.return_value = make_response(200, payload)
    fetcher = make_fetcher(sess)

    with pytest.raises(ManifestFetchError, match="JSON array"):
        fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)


def test_invalid_release_entry_fails():
    sess = MagicMock()
    sess.get.return_value = make_response(200, [{"release_name": "jdk-16"}])
    fetcher = make_fetcher(sess)

    with pytest.raises(ManifestFetchError, match="malformed release entry"):
        fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)


@pytest.mark.parametrize("exc", [requests.Timeout("read timed out"), requests.ConnectionError("refused")])
def test_transport_errors_fail(exc):
    sess = MagicMock()
    sess.get.side_effect = exc
    fetcher = make_fetcher(sess)

    with pytest.raises(ManifestFetchError) as excinfo:
        fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)

    assert excinfo.value.status_code is None
    assert excinfo.value.__cause__ is exc


def test_page_ceiling(manifest_data):
    sess = MagicMock()
    sess.get.return_value = make_response(200, manifest_data)
    fetcher = make_fetcher(sess, max_pages=3)

    with pytest.raises(ManifestFetchError, match="more than 3 pages"):
        fetcher.fetch_catalog(InstallRequest(version="8", architecture="x64"), AdoptiumJvmImpl.Hotspot)

    assert sess.get.call_count == 3


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("JAVASETUP_ADOPTIUM_API", "https://mirror.example.invalid/")
    monkeypatch.setenv("JAVASETUP_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("JAVASETUP_MAX_PAGES", "7")

    fetcher = AdoptiumManifestFetcher(sess=MagicMock(), platform_resolver=lambda: "linux")

    assert fetcher.timeout == 2.5
    assert fetcher.max_pages == 7
    url = fetcher.build_url(InstallRequest(version="17", architecture="x64"), AdoptiumJvmImpl.Hotspot, 0)
    assert url.startswith("https://mirror.example.invalid/v3/assets/version/%5B1.0,100.0%5D?")
