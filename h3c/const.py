"""Constants for the H3C 802.1X supplicant."""

from typing import Final

VERSION: Final = "0.1.0"

DEFAULT_INTERFACE: Final = "en0"

# H3C client version information, sent verbatim ahead of the username
VERSION_INFO: Final = b"\x06\x07bjQ7SE8BZ3MqHhs3clMregcDY3Y=\x20\x20"

# Ethernet MTU minus the EAPoL header (4) and the EAP request header (5)
EAP_MAX_PAYLOAD: Final = 1500 - 4 - 5
MAX_USERNAME_LENGTH: Final = EAP_MAX_PAYLOAD - len(VERSION_INFO)

MD5_DIGEST_SIZE: Final = 16

# Seconds the daemon waits before replacing an exited worker
RESPAWN_DELAY: Final = 5

EXIT_SUCCESS: Final = 0
EXIT_FAILURE: Final = 1

ENGINE_ENTRY_POINT_GROUP: Final = "h3c.engines"
SYSLOG_IDENT: Final = "h3c"
