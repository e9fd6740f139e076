"""
Sangfor AC management API client.

This module binds every supported appliance operation to the signing,
transport and envelope layers. Each request is signed with a fresh
nonce and the MD5 digest of the shared secret plus that nonce.
"""

import functools
import logging
from typing import Any, List, Optional
from urllib.parse import urlsplit

from .constants import (
    API_PREFIX,
    DEFAULT_CONFIG,
    FIELD_METHOD,
    METHOD_DELETE,
    METHOD_GET,
    METHOD_POST,
    METHOD_PUT,
    METHOD_VERIFY,
    PATH_BIND_IPMAC,
    PATH_BIND_IPMAC_OP,
    PATH_BIND_USER,
    PATH_FLUX_POLICY,
    PATH_GROUP,
    PATH_GROUP_NET_POLICY,
    PATH_NET_POLICY,
    PATH_ONLINE_USERS,
    PATH_STATUS_APP_RANK,
    PATH_STATUS_BANDWIDTH_USAGE,
    PATH_STATUS_CPU_USAGE,
    PATH_STATUS_DISK_USAGE,
    PATH_STATUS_INSIDE_LIB,
    PATH_STATUS_LOG_NUM,
    PATH_STATUS_MEM_USAGE,
    PATH_STATUS_ONLINE_USER,
    PATH_STATUS_SESSION_NUM,
    PATH_STATUS_SYS_TIME,
    PATH_STATUS_THROUGHPUT,
    PATH_STATUS_USER_RANK,
    PATH_STATUS_VERSION,
    PATH_USER,
    PATH_USER_FLUX_POLICY,
    PATH_USER_NET_POLICY,
)
from .envelope import decode
from .exceptions import ArgumentError, ConfigurationError, DecodeError
from .models import (
    AppRank,
    AppRankFilter,
    BindIpMac,
    BindUser,
    FluxPolicy,
    GroupPolicySet,
    InsideLib,
    LogNum,
    NetPolicy,
    OnlineUserQuery,
    OnlineUsers,
    OnlineUserUp,
    Throughput,
    ThroughputFilter,
    UserAdd,
    UserDetail,
    UserPolicySet,
    UserRank,
    UserRankFilter,
    UserSearch,
)
from .request import LogicalRequest, RequestBuilder
from .signer import Signer
from .transport import Transport

logger = logging.getLogger(__name__)


def unverified(reason: str):
    """
    Mark an endpoint whose behavior has not been confirmed on a real appliance.

    The call goes through unchanged; a warning is logged and the reason is
    exposed as ``method.unverified``.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            logger.warning("%s is unverified: %s", func.__name__, reason)
            return func(self, *args, **kwargs)
        wrapper.unverified = reason
        return wrapper
    return decorator


def _tunnel(verb: str, **query) -> dict:
    """Query pairs for a verb carried through ``_method``."""
    return {FIELD_METHOD: verb, **query}


class ACClient:
    """
    Client for the Sangfor AC HTTP management API.

    Requests are synchronous and never retried; the first error is raised
    to the caller.

    Example usage:
        with ACClient("192.168.1.1:9999", "secret") as ac:
            print(ac.get_version())
    """

    def __init__(self, target: str, secret: str, signer: Optional[Signer] = None, **config):
        """
        Initialize AC client.

        Args:
            target: Appliance address, ``host`` or ``host:port``
            secret: Shared secret configured on the appliance
            signer: Signer for request digests (defaults to a fresh Signer)
            **config: Configuration options (port, timeout, err_lang_cn,
                empty_array_fields)
        """
        self.target = target
        self.secret = secret

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        # Validate configuration
        self._validate_config()

        self.base_url = f"http://{self._address()}/{API_PREFIX}/"
        self.builder = RequestBuilder(
            self.base_url,
            self.secret,
            signer=signer,
            err_lang_cn=self.config['err_lang_cn'],
        )
        self.transport = Transport(timeout=self.config['timeout'])

    def _validate_config(self):
        """Validate client configuration."""
        if not self.secret:
            raise ConfigurationError("secret cannot be empty")

        if not self.target or '/' in self.target:
            raise ConfigurationError(f"target must be host or host:port, got {self.target!r}")

        if self.config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

        port = self.config['port']
        if not isinstance(port, int) or not 0 < port < 65536:
            raise ConfigurationError(f"invalid port {port!r}")

    def _address(self) -> str:
        """Return ``host:port``, adding the configured port when missing."""
        parts = urlsplit('//' + self.target)
        try:
            port = parts.port
        except ValueError as e:
            raise ConfigurationError(f"invalid target {self.target!r}: {e}") from e
        if not parts.hostname or self.target.endswith(':'):
            raise ConfigurationError(f"invalid target {self.target!r}")
        if port is None:
            return f"{self.target}:{self.config['port']}"
        return self.target

    @property
    def session(self):
        """Underlying ``requests.Session``."""
        return self.transport.session

    def send(self, logical: LogicalRequest, shape: Optional[Any] = None, fix_json: bool = False) -> Any:
        """
        Sign, send and decode one request.

        Args:
            logical: Request as described by an endpoint binding
            shape: Type the envelope ``data`` is validated against
            fix_json: Rewrite empty-object array fields before decoding

        Returns:
            Decoded payload (None when ``shape`` is None)

        Raises:
            ArgumentError: If the request cannot be built
            TransportError: If the HTTP request fails
            EmptyResponseError: If the appliance returns an empty body
            DecodeError: If the envelope or payload is malformed
            RemoteError: If the appliance reports a non-zero code
        """
        request = self.builder.build(logical)
        raw = self.transport.execute(request)
        fields = self.config['empty_array_fields'] if fix_json else ()
        return decode(raw, shape, fields)

    def _get_int(self, path: str) -> int:
        # counters and percentages may come back as JSON floats
        value = self.send(LogicalRequest(path), float)
        if value is None:
            raise DecodeError(f"{path} returned no data")
        return int(value)

    # Status

    def get_version(self) -> str:
        """Get the appliance firmware version."""
        return self.send(LogicalRequest(PATH_STATUS_VERSION), str)

    def get_online_user_count(self) -> int:
        """Get the number of online users."""
        return self._get_int(PATH_STATUS_ONLINE_USER)

    def get_session_num(self) -> int:
        """Get the current session count."""
        return self._get_int(PATH_STATUS_SESSION_NUM)

    def get_inside_lib(self) -> List[InsideLib]:
        """Get versions of built-in libraries (virus, URL, app identification...)."""
        return self.send(LogicalRequest(PATH_STATUS_INSIDE_LIB), List[InsideLib])

    def get_log_num(self) -> LogNum:
        """Get blocked/recorded log counters."""
        return self.send(LogicalRequest(PATH_STATUS_LOG_NUM), LogNum)

    def get_cpu_usage(self) -> int:
        """Get CPU usage as an integer percentage."""
        return self._get_int(PATH_STATUS_CPU_USAGE)

    def get_mem_usage(self) -> int:
        """Get memory usage as an integer percentage."""
        return self._get_int(PATH_STATUS_MEM_USAGE)

    def get_disk_usage(self) -> int:
        """Get disk usage as an integer percentage."""
        return self._get_int(PATH_STATUS_DISK_USAGE)

    def get_sys_time(self) -> str:
        """Get the appliance system time, e.g. ``2017-12-13 17:52:11``."""
        return self.send(LogicalRequest(PATH_STATUS_SYS_TIME), str)

    def get_throughput(self, filter: Optional[ThroughputFilter] = None) -> Throughput:
        """
        Get current upstream/downstream throughput.

        Args:
            filter: Unit (bits/bytes) and interface; all WAN interfaces by default
        """
        data = {"filter": filter.to_data()} if filter is not None else None
        request = LogicalRequest(PATH_STATUS_THROUGHPUT, METHOD_POST, _tunnel(METHOD_GET), data)
        return self.send(request, Throughput)

    def get_user_rank(self, filter: Optional[UserRankFilter] = None) -> List[UserRank]:
        """Get the user traffic ranking."""
        data = {"filter": filter.to_data()} if filter is not None else None
        request = LogicalRequest(PATH_STATUS_USER_RANK, METHOD_POST, _tunnel(METHOD_GET), data)
        return self.send(request, List[UserRank])

    def get_app_rank(self, filter: Optional[AppRankFilter] = None) -> List[AppRank]:
        """Get the application traffic ranking."""
        data = {"filter": filter.to_data()} if filter is not None else None
        request = LogicalRequest(PATH_STATUS_APP_RANK, METHOD_POST, _tunnel(METHOD_GET), data)
        return self.send(request, List[AppRank])

    def get_bandwidth_usage(self) -> int:
        """Get bandwidth usage as an integer percentage."""
        return self._get_int(PATH_STATUS_BANDWIDTH_USAGE)

    # Users

    def user_add(self, user: UserAdd) -> str:
        """
        Add a local user.

        Raises:
            ArgumentError: If the user has no name
        """
        if not user.name:
            raise ArgumentError("cannot add user without username")
        return self.send(LogicalRequest(PATH_USER, METHOD_POST, data=user.to_data()), str)

    def user_delete(self, name: str) -> str:
        """Delete a user by name."""
        request = LogicalRequest(PATH_USER, METHOD_POST, _tunnel(METHOD_DELETE), {"name": name})
        return self.send(request, str)

    def user_search(self, search: UserSearch) -> List[UserDetail]:
        """Search users by name, IP range or MAC (at most 100 results)."""
        request = LogicalRequest(PATH_USER, METHOD_POST, _tunnel(METHOD_GET), search.to_data())
        return self.send(request, List[UserDetail], fix_json=True)

    def user_get(self, name: str) -> Optional[UserDetail]:
        """Get a user's details by exact name."""
        request = LogicalRequest(PATH_USER, METHOD_GET, {"name": name})
        return self.send(request, Optional[UserDetail], fix_json=True)

    def user_net_policy_set(self, policy: UserPolicySet) -> str:
        """Add, remove or replace the internet access policies of a user."""
        return self.send(LogicalRequest(PATH_USER_NET_POLICY, METHOD_POST, data=policy.to_data()), str)

    @unverified("appliance rejects the documented request format")
    def user_net_policy_get(self, name: str) -> List[str]:
        """Get the internet access policies of a user."""
        request = LogicalRequest(PATH_USER_NET_POLICY, METHOD_GET, {"user": name})
        return self.send(request, List[str])

    def user_flux_policy_set(self, policy: UserPolicySet) -> str:
        """Add, remove or replace the flow-control policies of a user."""
        return self.send(LogicalRequest(PATH_USER_FLUX_POLICY, METHOD_POST, data=policy.to_data()), str)

    @unverified("appliance rejects the documented request format")
    def user_flux_policy_get(self, name: str) -> List[str]:
        """Get the flow-control policies of a user."""
        request = LogicalRequest(PATH_USER_FLUX_POLICY, METHOD_GET, {"user": name})
        return self.send(request, List[str])

    @unverified("appliance answers with user details instead of a verification result")
    def user_verify_password(self, name: str, password: str) -> None:
        """
        Verify a local user's password.

        Success data is expected to be a list of strings.

        Raises:
            RemoteError: If the appliance rejects the credentials
            DecodeError: If the appliance answers with anything else
        """
        request = LogicalRequest(
            PATH_USER,
            METHOD_GET,
            _tunnel(METHOD_VERIFY, name=name, password=password),
        )
        self.send(request, List[str])

    # Groups

    def group_add(self, path: str, desc: Optional[str] = None) -> str:
        """
        Add a group.

        Args:
            path: Group path starting with ``/``, at most 15 levels deep
            desc: Group description
        """
        data = {"path": path}
        if desc is not None:
            data["desc"] = desc
        return self.send(LogicalRequest(PATH_GROUP, METHOD_POST, data=data), str)

    def group_delete(self, path: str) -> str:
        """Delete a group."""
        request = LogicalRequest(PATH_GROUP, METHOD_POST, _tunnel(METHOD_DELETE), {"path": path})
        return self.send(request, str)

    def group_put(self, path: str, desc: str) -> str:
        """Update a group's description (the only mutable attribute)."""
        request = LogicalRequest(
            PATH_GROUP, METHOD_POST, _tunnel(METHOD_PUT), {"path": path, "desc": desc}
        )
        return self.send(request, str)

    def group_net_policy_set(self, policy: GroupPolicySet) -> str:
        """Add, remove or replace the internet access policies of a group."""
        return self.send(LogicalRequest(PATH_GROUP_NET_POLICY, METHOD_POST, data=policy.to_data()), str)

    @unverified("appliance rejects the documented request format")
    def group_net_policy_get(self, path: str) -> List[str]:
        """Get the internet access policies of a group."""
        request = LogicalRequest(PATH_GROUP_NET_POLICY, METHOD_GET, {"path": path})
        return self.send(request, List[str])

    # Policies

    def policy_net_get(self) -> List[NetPolicy]:
        """List internet access policies."""
        return self.send(LogicalRequest(PATH_NET_POLICY), List[NetPolicy], fix_json=True)

    def policy_flux_get(self) -> List[FluxPolicy]:
        """List flow-control channels."""
        return self.send(LogicalRequest(PATH_FLUX_POLICY), List[FluxPolicy], fix_json=True)

    # Bindings

    @unverified("response format of the binding search is undocumented")
    def bind_user_search(self, value: str) -> None:
        """Search user to IP/MAC bindings by user name, IP or MAC."""
        request = LogicalRequest(PATH_BIND_USER, METHOD_GET, {"search": value})
        self.send(request, List[FluxPolicy], fix_json=True)

    @unverified("appliance rejects the documented request format")
    def bind_user_add(self, bind: BindUser) -> str:
        """Bind a user to an IP, MAC or IP+MAC."""
        return self.send(LogicalRequest(PATH_BIND_USER, METHOD_POST, data=bind.to_data()), str)

    @unverified("appliance rejects the documented request format")
    def bind_user_delete(self, addr: str) -> str:
        """Remove a user binding by address."""
        request = LogicalRequest(PATH_BIND_USER, METHOD_POST, _tunnel(METHOD_DELETE), {"addr": addr})
        return self.send(request, str)

    def bind_ipmac_search(self, value: str) -> BindIpMac:
        """
        Look up an IP/MAC binding by IP or MAC.

        Raises:
            RemoteError: If no binding matches
        """
        request = LogicalRequest(PATH_BIND_IPMAC, METHOD_GET, {"search": value})
        return self.send(request, BindIpMac, fix_json=True)

    def bind_ipmac_add(self, bind: BindIpMac) -> None:
        """
        Add an IP/MAC binding.

        Raises:
            ArgumentError: If ip or mac is missing
        """
        if not bind.ip or not bind.mac:
            raise ArgumentError("Arguments check failed: ip and mac are required")
        self.send(LogicalRequest(PATH_BIND_IPMAC_OP, METHOD_POST, data=bind.to_data()))

    def bind_ipmac_delete(self, ip: str) -> None:
        """Remove the IP/MAC binding of an IP."""
        request = LogicalRequest(PATH_BIND_IPMAC_OP, METHOD_POST, _tunnel(METHOD_DELETE), {"ip": ip})
        self.send(request)

    # Online users

    def online_user_get(self, query: Optional[OnlineUserQuery] = None) -> OnlineUsers:
        """List online users (at most 100), optionally filtered."""
        data = query.to_data() if query is not None else {}
        request = LogicalRequest(PATH_ONLINE_USERS, METHOD_POST, _tunnel(METHOD_GET), data)
        return self.send(request, OnlineUsers)

    def online_user_kick(self, ip: str) -> None:
        """Force the user online at ``ip`` to log out."""
        request = LogicalRequest(PATH_ONLINE_USERS, METHOD_POST, _tunnel(METHOD_DELETE), {"ip": ip})
        self.send(request)

    def online_user_up(self, user: OnlineUserUp) -> None:
        """Log a user on at an IP (single sign-on)."""
        self.send(LogicalRequest(PATH_ONLINE_USERS, METHOD_POST, data=user.to_data()))

    def close(self):
        """Close HTTP session."""
        self.transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
