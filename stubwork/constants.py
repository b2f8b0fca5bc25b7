"""Shared constants for stubwork."""

ORDER_MOST_RECENT = "most_recent"
ORDER_FIRST_REGISTERED = "first_registered"
RESOLUTION_ORDERS = (ORDER_MOST_RECENT, ORDER_FIRST_REGISTERED)

DEFAULT_MAX_REPR_LENGTH = 120
DEFAULT_LOGGER_NAME = "stubwork"

ENV_CONFIG_PATH = "STUBWORK_CONFIG"
ENV_RESOLUTION_ORDER = "STUBWORK_RESOLUTION_ORDER"
ENV_LOG_FILE = "STUBWORK_LOG_FILE"

UNSTUBBED_CALL_TEMPLATE = "unstubbed_call.j2"
