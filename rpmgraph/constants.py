from enum import StrEnum


RPM_SUFFIX = ".rpm"
SOURCE_RPM_SUFFIX = "src.rpm"

# requirements on rpm's own capabilities, not on other packages
RPMLIB_PREFIX = "rpmlib"

EXIT_SUCCESS = 0
EXIT_MISSING_PREREQUISITE = 1
EXIT_NO_PACKAGES_FOUND = 2
EXIT_INVALID_ARGUMENTS = 3
EXIT_UNKNOWN_ARCHITECTURE = 4
EXIT_PACKAGE_ERROR = 5


class Arch(StrEnum):
    """Architectures of the RPM files this tool is pointed at"""
    NOARCH = "noarch"
    X86_64 = "x86_64"
    SRC = "src"


class SkipReason(StrEnum):
    """Why a file did not contribute to the reverse-dependency map"""
    MISSING = "missing"
    MALFORMED_FILENAME = "malformed-filename"
    QUERY_FAILED = "query-failed"
