"""
Constants for the Sangfor AC client library.
Wire names and endpoint paths follow the appliance's v1 management API.
"""

# HTTP headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT_LANGUAGE = "Accept-Language"
CONTENT_TYPE_JSON = "application/json"
LANGUAGE_CN = "zh-CN"

# Signing fields (query string for GET, JSON body for POST)
FIELD_RANDOM = "random"
FIELD_MD5 = "md5"

# Method tunneling query parameter and the verbs the appliance recognizes
FIELD_METHOD = "_method"
METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_DELETE = "DELETE"
METHOD_VERIFY = "verify"

# Default configuration values
DEFAULT_PORT = 9999
DEFAULT_TIMEOUT = 20

# Fields the appliance emits as {} when they are empty arrays
EMPTY_ARRAY_FIELDS = (
    "bind_cfg",
    "ipmac",
    "ou",
    "aduser",
    "adgroup",
    "exc_aduser",
    "attribute",
    "user_attr_grp",
    "sourceip",
    "location",
    "terminal",
    "target_area",
    "value",
)

DEFAULT_CONFIG = {
    'port': DEFAULT_PORT,                      # used when target has no port
    'timeout': DEFAULT_TIMEOUT,                # HTTP timeout in seconds
    'err_lang_cn': True,                       # ask for zh-CN error messages
    'empty_array_fields': EMPTY_ARRAY_FIELDS,  # () disables normalization
}

API_PREFIX = "v1"

# Status endpoints
PATH_STATUS_VERSION = "status/version"
PATH_STATUS_ONLINE_USER = "status/online-user"
PATH_STATUS_SESSION_NUM = "status/session-num"
PATH_STATUS_INSIDE_LIB = "status/insidelib"
PATH_STATUS_LOG_NUM = "status/log"
PATH_STATUS_CPU_USAGE = "status/cpu-usage"
PATH_STATUS_MEM_USAGE = "status/mem-usage"
PATH_STATUS_DISK_USAGE = "status/disk-usage"
PATH_STATUS_SYS_TIME = "status/sys-time"
PATH_STATUS_THROUGHPUT = "status/throughput"
PATH_STATUS_USER_RANK = "status/user-rank"
PATH_STATUS_APP_RANK = "status/app-rank"
PATH_STATUS_BANDWIDTH_USAGE = "status/bandwidth-usage"

# User endpoints
PATH_USER = "user"
PATH_USER_NET_POLICY = "user/netpolicy"
PATH_USER_FLUX_POLICY = "user/fluxpolicy"

# Group endpoints
PATH_GROUP = "group"
PATH_GROUP_NET_POLICY = "group/netpolicy"

# Policy endpoints
PATH_NET_POLICY = "policy/netpolicy"
PATH_FLUX_POLICY = "policy/fluxpolicy"

# Binding endpoints (lookup and mutation of IP/MAC bindings live on different paths)
PATH_BIND_USER = "bindinfo/user-bindinfo"
PATH_BIND_IPMAC = "ipmac-bindinfo"
PATH_BIND_IPMAC_OP = "bindinfo/ipmac-bindinfo"

# Online user endpoints
PATH_ONLINE_USERS = "online-users"
