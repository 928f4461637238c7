"""Constants shared across artifact domain models."""

DEFAULT_EXTENSION = "jar"
SNAPSHOT_SUFFIX = "SNAPSHOT"
COMPILE_SCOPE = "compile"

LOCAL_TARGET_ID = "local-delta"

CHECKSUM_ALGORITHMS = ("sha1", "md5")
