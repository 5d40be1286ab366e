"""Camunda Transport Layer - Module Exports"""

from .forwarder import CamundaForwarder, build_basic_auth_header

__all__ = [
    "CamundaForwarder",
    "build_basic_auth_header",
]
