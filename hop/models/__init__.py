"""Data models for management API resources."""

from .connections import (
    ChannelDetails,
    ChannelInfo,
    ClientProperties,
    ConnectionDetails,
    ConnectionInfo,
    ConsumerDetails,
    QueueDetails,
    UserConnectionInfo,
)
from .definitions import Definitions
from .exchanges import BindingInfo, DestinationType, ExchangeInfo
from .overview import ClusterId, ExchangeType, NodeInfo, ObjectTotals, OverviewResponse, QueueTotals
from .policies import PolicyInfo
from .queues import GetAckMode, GetEncoding, InboundMessage, OutboundMessage, QueueInfo
from .shovels import ShovelStatus
from .stats import MessageStats, RateDetails, Sample
from .users import CurrentUserDetails, TopicPermissions, UserInfo, UserPermissions
from .vhosts import VhostInfo, VhostLimits

__all__ = [
    "BindingInfo",
    "ChannelDetails",
    "ChannelInfo",
    "ClientProperties",
    "ClusterId",
    "ConnectionDetails",
    "ConnectionInfo",
    "ConsumerDetails",
    "CurrentUserDetails",
    "Definitions",
    "DestinationType",
    "ExchangeInfo",
    "ExchangeType",
    "GetAckMode",
    "GetEncoding",
    "InboundMessage",
    "MessageStats",
    "NodeInfo",
    "ObjectTotals",
    "OutboundMessage",
    "OverviewResponse",
    "PolicyInfo",
    "QueueDetails",
    "QueueInfo",
    "QueueTotals",
    "RateDetails",
    "Sample",
    "ShovelStatus",
    "TopicPermissions",
    "UserConnectionInfo",
    "UserInfo",
    "UserPermissions",
    "VhostInfo",
    "VhostLimits",
]
