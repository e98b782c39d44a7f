"""Centralized constants for sizekit."""

# Version tree
BASE_VERSION_NAME = "base"
NESTED_NAME_SEPARATOR = "_"

# Metadata record
INFO_FIELD_SUFFIX = "_information"
RECORD_LINE_TERMINATOR = "\n"
SIZE_NAME_SEPARATOR = ":"
SIZE_DIMENSION_SEPARATOR = "x"

# Size probe
# One line per frame; only the first line is read.
IDENTIFY_FORMAT = "%wx%h\n"
IDENTIFY_EXECUTABLES = ["identify"]
MAGICK_EXECUTABLES = ["magick"]
DEFAULT_PROBE_TIMEOUT = 10.0

PROBE_BACKEND_IDENTIFY = "identify"
PROBE_BACKEND_OIIO = "oiio"
PROBE_BACKENDS = {PROBE_BACKEND_IDENTIFY, PROBE_BACKEND_OIIO}

# Name collisions in the version tree
COLLISION_OVERWRITE = "overwrite"
COLLISION_ERROR = "error"
COLLISION_POLICIES = {COLLISION_OVERWRITE, COLLISION_ERROR}
