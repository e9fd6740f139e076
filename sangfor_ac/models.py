"""
Payload models for the Sangfor AC management API.

Response models inherit from :class:`ResponseModel`. They mirror the JSON
the appliance returns and default every field, so a sparse answer or a
``null`` value still validates. Request models inherit from
:class:`RequestModel`: optional fields default to ``None`` and are left out
of the wire payload, fields the appliance always expects carry a concrete
default.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RequestModel(BaseModel):
    """Base for payloads sent to the appliance."""

    model_config = ConfigDict(populate_by_name=True)

    def to_data(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible body fields, dropping unset optionals."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class ResponseModel(BaseModel):
    """Base for payloads returned by the appliance."""

    @model_validator(mode='before')
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null means "unset": fall back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# --- Status ---


class InsideLib(ResponseModel):
    """Built-in library version (virus, URL, app identification...)."""

    name: str = ""
    type: str = ""  # kav, url, up, contchk, trace
    current: str = ""
    new: str = ""
    expire: str = ""
    enable: bool = False
    is_expired: int = 0


class LogNum(ResponseModel):
    block: int = 0
    record: int = 0


class ThroughputFilter(RequestModel):
    unit: Optional[str] = None  # bits or bytes
    interface: Optional[str] = None


class Throughput(ResponseModel):
    recv: int = 0
    send: int = 0
    unit: str = ""


class UserRankFilter(RequestModel):
    """
    User traffic ranking filter.

    Only one of ``groups``, ``users`` and ``ips`` is honored by the
    appliance, in that order of precedence.
    """

    top: Optional[int] = None
    line: Optional[str] = None  # "0" for all lines
    groups: Optional[List[str]] = None
    users: Optional[List[str]] = None
    ips: Optional[List[str]] = None


class UserRankApp(ResponseModel):
    id: int = 0
    app: str = ""
    up: int = 0
    down: int = 0
    total: int = 0
    percent: int = 0


class UserRankDetail(ResponseModel):
    data: List[UserRankApp] = Field(default_factory=list)


class UserRank(ResponseModel):
    id: int = 0
    name: str = ""
    group: str = ""
    ip: str = ""
    up: int = 0
    down: int = 0
    total: int = 0
    session: int = 0
    status: bool = False  # False when the user is frozen
    detail: Optional[UserRankDetail] = None


class AppRankFilter(RequestModel):
    top: Optional[int] = None
    line: Optional[str] = None
    groups: Optional[List[str]] = None


class AppRankUser(ResponseModel):
    user: str = ""
    grp: str = ""
    ip: str = ""
    up: int = 0
    down: int = 0
    total: int = 0


class AppRankUserData(ResponseModel):
    data: List[AppRankUser] = Field(default_factory=list)
    count: int = 0


class AppRank(ResponseModel):
    app: str = ""
    line: int = 0
    line_name: str = ""
    up: int = 0
    down: int = 0
    total: int = 0
    rate: int = 0
    session: int = 0
    user_data: Optional[AppRankUserData] = None


# --- Users ---


class SelfPass(RequestModel):
    enable: Optional[bool] = None
    password: Optional[str] = None
    modify_once: Optional[bool] = None


class BindCfg(RequestModel):
    ip: Optional[str] = None
    mac: Optional[str] = None
    out_time: Optional[str] = None  # e.g. 2019-10-31
    bindgoal: Optional[str] = None  # noauth, loginlimit, noauth_and_loginlimit
    desc: Optional[str] = None


class CommonUser(RequestModel):
    allow_change: Optional[bool] = None
    enable: Optional[bool] = None


class UserAdd(RequestModel):
    """New local user. ``father_path`` starts with ``/``."""

    name: str = ""
    father_path: Optional[str] = None
    desc: Optional[str] = None
    show_name: Optional[str] = None
    expire_time: Optional[str] = None  # empty means never
    enable: Optional[bool] = None
    logout: Optional[bool] = None
    limit_ipmac: Optional[List[str]] = None
    self_pass: Optional[SelfPass] = None
    bind_cfg: Optional[List[BindCfg]] = None
    common_user: Optional[CommonUser] = None
    custom_cfg: Optional[Dict[str, str]] = None


class NetPolicyInfo(ResponseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    founder: Optional[str] = None
    expire: Optional[str] = None
    status: Optional[bool] = None
    depict: Optional[str] = None


class UserSelfPassInfo(ResponseModel):
    enable: bool = False
    modify_once: bool = False


class UserLimitIpmac(ResponseModel):
    enable: bool = False
    ipmac: List[str] = Field(default_factory=list)


class UserCommonInfo(ResponseModel):
    enable: bool = False
    allow_change: bool = False


class UserExpireInfo(ResponseModel):
    enable: bool = False
    date: str = ""  # YYYY-MM-DD


class UserDetail(ResponseModel):
    name: str = ""
    show_name: str = ""
    desc: str = ""
    father_path: str = ""
    create: str = ""
    create_flag: bool = False
    enable: bool = False
    logout: bool = False
    bind_cfg: List[str] = Field(default_factory=list)
    custom_cfg: Dict[str, str] = Field(default_factory=dict)
    policy: List[NetPolicyInfo] = Field(default_factory=list)
    self_pass: UserSelfPassInfo = Field(default_factory=UserSelfPassInfo)
    limit_ipmac: UserLimitIpmac = Field(default_factory=UserLimitIpmac)
    common_user: UserCommonInfo = Field(default_factory=UserCommonInfo)
    expire_time: UserExpireInfo = Field(default_factory=UserExpireInfo)


class ExpireRange(RequestModel):
    start: Optional[str] = None
    end: Optional[str] = None


class UserSearchExtend(RequestModel):
    father_path: Optional[str] = None  # defaults to "/" on the appliance
    custom_cfg: Optional[Dict[str, str]] = None
    user_status: Optional[str] = None  # all, enabled, disabled
    public: Optional[bool] = None
    expire: Optional[ExpireRange] = None


class UserSearch(RequestModel):
    """
    User search, at most 100 results.

    ``search_value`` depends on ``search_type``: a (fuzzy) user name for
    ``user``, ``{"start": ..., "end": ...}`` for ``ip``, a MAC for ``mac``.
    """

    search_type: str = "user"
    search_value: Any = ""
    extend: Optional[UserSearchExtend] = None


class UserPolicySet(RequestModel):
    opr: str = "add"  # add, del, modify
    user: str = ""
    policy: List[str] = Field(default_factory=list)


class GroupPolicySet(RequestModel):
    opr: str = "add"  # add, del, modify
    group: str = ""
    policy: List[str] = Field(default_factory=list)


# --- Policies ---


class NetPolicyUserInfo(ResponseModel):
    ou: List[str] = Field(default_factory=list)
    aduser: List[str] = Field(default_factory=list)
    adgroup: List[str] = Field(default_factory=list)
    exc_aduser: List[str] = Field(default_factory=list)
    attribute: List[str] = Field(default_factory=list)
    user_attr_grp: List[str] = Field(default_factory=list)
    sourceip: List[str] = Field(default_factory=list)
    location: List[str] = Field(default_factory=list)
    terminal: List[str] = Field(default_factory=list)
    target_area: List[str] = Field(default_factory=list)
    local: Optional[str] = None


class NetPolicy(ResponseModel):
    policy_info: NetPolicyInfo = Field(default_factory=NetPolicyInfo)
    user_info: NetPolicyUserInfo = Field(default_factory=NetPolicyUserInfo)


class FluxPolicy(ResponseModel):
    """
    Flow-control channel.

    The vendor documentation lists more fields (children, default channel
    flags) than the appliance actually returns; only observed fields are kept.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    name: str = ""
    father_id: str = ""
    ip_group: Optional[str] = Field(default=None, alias="di")
    object: Optional[str] = None
    service: Optional[str] = None
    active_time: Optional[str] = Field(default=None, alias="time")
    status: Optional[bool] = None
    assured: Optional[List[str]] = None  # [up, down], -1 is unlimited
    max: Optional[List[str]] = None
    single: Optional[List[str]] = None


# --- Bindings ---


class Noauth(RequestModel):
    enable: bool = False
    expire_time: int = 0  # unix timestamp, 0 never expires


class BindUser(RequestModel):
    """
    User to IP/MAC binding.

    ``addr`` matches ``addr_type``: ``192.168.1.1`` for ip,
    ``ff-ff-ff-ff-ff-ff`` for mac, ``192.168.1.1+ff-ff-ff-ff-ff-ff`` for ipmac.
    """

    name: str = ""
    enable: bool = False
    desc: Optional[str] = None
    addr_type: Optional[str] = None
    addr: Optional[str] = None
    limitlogon: Optional[bool] = None
    noauth: Optional[Noauth] = None


class BindIpMac(RequestModel):
    ip: Optional[str] = None
    mac: Optional[str] = None
    desc: Optional[str] = None


# --- Online users ---


class OnlineUserFilter(RequestModel):
    type: Optional[str] = None  # user, ip, mac
    value: Optional[List[str]] = None


class OnlineUserQuery(RequestModel):
    status: Optional[str] = None  # all, frozen, active
    terminal: Optional[str] = None  # all, pc, mobile, multi, iot, armarium, custom
    filter: Optional[OnlineUserFilter] = None


class OnlineUser(ResponseModel):
    name: Optional[str] = None
    show_name: Optional[str] = None
    father_path: Optional[str] = None
    group: Optional[str] = None
    ip: Optional[str] = None
    mac: Optional[str] = None
    terminal: Optional[int] = None
    authway: Optional[int] = None
    login_time: Optional[int] = None
    online_time: Optional[int] = None


class OnlineUsers(ResponseModel):
    count: int = 0
    users: List[OnlineUser] = Field(default_factory=list)  # at most 100


class OnlineUserUp(RequestModel):
    """Single sign-on of a user onto an IP."""

    ip: str = ""
    name: str = ""
    show_name: str = ""
    group: str = ""
    mac: str = ""
