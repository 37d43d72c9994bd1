import argparse
import logging
import sys

from pydantic import ValidationError

from javasetup.distributions.adoptium import AdoptiumDistribution, AdoptiumManifestFetcher
from javasetup.errors import JavaSetupError
from javasetup.model.java import AdoptiumJvmImpl, InstallRequest, JavaPackageType


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="javasetup-resolve",
        description="Resolve a Java version spec against the Adoptium release catalog.",
    )
    parser.add_argument("version", help='version spec, e.g. "17", "8.x", "x", "21-ea"')
    parser.add_argument("--architecture", "-a", default=None, help="defaults to the host architecture")
    parser.add_argument(
        "--package-type",
        "-p",
        choices=[t.value for t in JavaPackageType],
        default=JavaPackageType.Jdk.value,
    )
    parser.add_argument(
        "--implementation",
        "-i",
        choices=[impl.value for impl in AdoptiumJvmImpl],
        default=AdoptiumJvmImpl.Hotspot.value,
    )
    parser.add_argument("--os", dest="os_name", default=None, help="defaults to the host platform")
    parser.add_argument("--output", "-o", default=None, help="also write the resolved package JSON here")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    request_args = {"version": args.version, "package_type": args.package_type}
    if args.architecture is not None:
        request_args["architecture"] = args.architecture

    try:
        request = InstallRequest(**request_args)
    except ValidationError as e:
        print(f"Invalid request: {e}", file=sys.stderr)
        return 2

    platform_resolver = None
    if args.os_name is not None:
        os_name = args.os_name
        platform_resolver = lambda: os_name  # noqa: E731

    distribution = AdoptiumDistribution(
        request,
        AdoptiumJvmImpl(args.implementation),
        fetcher=AdoptiumManifestFetcher(platform_resolver=platform_resolver),
    )

    try:
        package = distribution.find_package_for_download(request.version)
    except JavaSetupError as e:
        print(e, file=sys.stderr)
        return 1

    print("Toolcache key:", distribution.toolcache_folder_name)
    print(package.to_json())
    if args.output is not None:
        package.write(args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
