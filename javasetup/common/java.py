TOOLCACHE_NAMESPACE = "Java"
ADOPTIUM_VENDOR_NAME = "Adoptium"

# every published feature release falls inside this range
ADOPTIUM_VERSION_RANGE = "[1.0,100.0]"
ADOPTIUM_PAGE_SIZE = 20

EA_SUFFIX = "-ea"
EA_BUILD_MARKER = "-ea."
