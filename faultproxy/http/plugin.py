# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import argparse
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from .parser import HttpParser


if TYPE_CHECKING:   # pragma: no cover
    from ..fault import FailureLedger


class HttpPipelineBasePlugin(ABC):
    """Base class for request pipeline stages.

    Stages run in a fixed order for every inbound request.  Each stage
    either returns a response packet, which terminates the request, or
    None to hand the request over to the next stage.

    Raise :exc:`HttpRequestRejected` or any other
    :exc:`HttpProtocolException` to terminate the request with the
    exception's response instead.
    """

    def __init__(
            self,
            flags: argparse.Namespace,
            ledger: 'FailureLedger',
    ) -> None:
        self.flags = flags
        self.ledger = ledger

    def name(self) -> str:
        """A unique name for your plugin.

        Defaults to name of the class.  Used as ``handled_by`` within
        access logs."""
        return self.__class__.__name__

    @abstractmethod
    async def handle_request(self, request: HttpParser) -> Optional[memoryview]:
        """Handler called for every complete inbound request.

        Return a response packet to terminate the request.
        Return None to continue with the next stage."""
        raise NotImplementedError()     # pragma: no cover
