# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import time
import socket
import unittest
from typing import Any, Dict, List, Optional

from ..proxy import FaultProxy


class TestCase(unittest.TestCase):
    """Base TestCase class that automatically setup and tear down faultproxy.

    Subclasses define ``FAULT_PROXY_STARTUP_FLAGS`` (at least ``--upstream``)
    and optionally ``FAULT_PROXY_OPTS``.  Proxy always listens upon an
    ephemeral port, available as ``self.PROXY.flags.port``."""

    DEFAULT_FAULT_PROXY_STARTUP_FLAGS: List[str] = []

    PROXY: Optional[FaultProxy] = None
    INPUT_ARGS: Optional[List[str]] = None

    @classmethod
    def setUpClass(cls) -> None:
        cls.INPUT_ARGS = list(
            getattr(cls, 'FAULT_PROXY_STARTUP_FLAGS')
            if hasattr(cls, 'FAULT_PROXY_STARTUP_FLAGS')
            else cls.DEFAULT_FAULT_PROXY_STARTUP_FLAGS,
        )
        cls.INPUT_ARGS.append('--port')
        cls.INPUT_ARGS.append('0')
        opts: Dict[str, Any] = getattr(cls, 'FAULT_PROXY_OPTS', {})

        cls.PROXY = FaultProxy(cls.INPUT_ARGS, **opts)
        cls.PROXY.__enter__()
        cls.wait_for_server(cls.PROXY.flags.port)

    @staticmethod
    def wait_for_server(
        proxy_port: int,
        wait_for_seconds: float = 10.0,
    ) -> None:
        """Wait for faultproxy server to come up."""
        start_time = time.time()
        while True:
            try:
                socket.create_connection(('127.0.0.1', proxy_port)).close()
                break
            except ConnectionRefusedError:
                time.sleep(0.1)

            if time.time() - start_time > wait_for_seconds:
                raise TimeoutError(
                    'Timed out while waiting for faultproxy to start...',
                )

    @classmethod
    def tearDownClass(cls) -> None:
        assert cls.PROXY
        cls.PROXY.__exit__(None, None, None)
        cls.PROXY = None
        cls.INPUT_ARGS = None
