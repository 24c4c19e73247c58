# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import sys
import time
import pprint
import signal
import asyncio
import logging
import threading
from typing import Any, List, Optional

from .fault import FailureLedger
from .exception import ConfigurationError
from .http.handler import HttpProtocolHandler
from .http.pipeline import Pipeline
from .common.flag import FlagParser, flags
from .common.constants import (
    IS_WINDOWS, DEFAULT_PORT, DEFAULT_BACKLOG, DEFAULT_VERSION,
    DEFAULT_LOG_FILE, DEFAULT_LOG_LEVEL, DEFAULT_LOG_FORMAT,
    DEFAULT_RULES_FILE, DEFAULT_IPV4_HOSTNAME,
)


logger = logging.getLogger(__name__)


flags.add_argument(
    '--version',
    '-v',
    action='store_true',
    default=DEFAULT_VERSION,
    help='Prints faultproxy version.',
)

flags.add_argument(
    '--log-level',
    type=str,
    default=DEFAULT_LOG_LEVEL,
    help='Valid options: DEBUG, INFO (default), WARNING, ERROR, CRITICAL. '
    'Both upper and lowercase values are allowed. '
    'You may also simply use the leading character e.g. --log-level d',
)

flags.add_argument(
    '--log-file',
    type=str,
    default=DEFAULT_LOG_FILE,
    help='Default: sys.stderr. Log file destination.',
)

flags.add_argument(
    '--log-format',
    type=str,
    default=DEFAULT_LOG_FORMAT,
    help='Log format for Python logger.',
)

flags.add_argument(
    '--hostname',
    type=str,
    default=str(DEFAULT_IPV4_HOSTNAME),
    help='Default: 127.0.0.1. Server IP address.',
)

flags.add_argument(
    '--port',
    type=int,
    default=DEFAULT_PORT,
    help='Default: 9000.  Server port.  Use 0 for an ephemeral port.',
)

flags.add_argument(
    '--backlog',
    type=int,
    default=DEFAULT_BACKLOG,
    help='Default: 100. Maximum number of pending connections to proxy server.',
)

flags.add_argument(
    '--rules-file',
    type=str,
    default=DEFAULT_RULES_FILE,
    help='Default: None.  JSON file with "delays" and "failures" rule lists.  '
    'Rules from file take precedence over --delay and --fail flags.',
)


class FaultProxy:
    """FaultProxy is a context manager to control faultproxy core.

    On ``setup()`` a listener is bound and an event loop started
    within a companion thread.  All client connections are served by
    that single event loop.  Every accepted connection is handled by
    :class:`~faultproxy.http.handler.HttpProtocolHandler` which drives
    the request through the :class:`~faultproxy.http.pipeline.Pipeline`.

    Failure counts are kept within :attr:`ledger` and live as long as
    this instance.
    """

    def __init__(self, input_args: Optional[List[str]] = None, **opts: Any) -> None:
        self.opts = opts
        self.flags = FlagParser.initialize(input_args, **opts)
        self.ledger: Optional[FailureLedger] = None
        self.pipeline: Optional[Pipeline] = None
        self.loop: Optional[asyncio.AbstractEventLoop] = None
        self.server: Optional[asyncio.AbstractServer] = None
        self.thread: Optional[threading.Thread] = None

    def __enter__(self) -> 'FaultProxy':
        self.setup()
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()

    def setup(self) -> None:
        self.ledger = FailureLedger()
        self.pipeline = Pipeline(self.flags, self.ledger)
        handler = HttpProtocolHandler(self.flags, self.pipeline)
        self.loop = asyncio.new_event_loop()
        self.server = self.loop.run_until_complete(
            asyncio.start_server(
                handler.handle,
                host=str(self.flags.hostname),
                port=self.flags.port,
                backlog=self.flags.backlog,
            ),
        )
        # Override flags.port to match the actual port
        # we are listening upon.  This is necessary to preserve
        # the server port when `--port=0` is used.
        self.flags.port = self.server.sockets[0].getsockname()[1]
        self.thread = threading.Thread(
            target=self.loop.run_forever,
            name='faultproxy-loop',
            daemon=True,
        )
        self.thread.start()
        logger.info(
            'Proxy running at: http://%s:%d' %
            (self.flags.hostname, self.flags.port),
        )
        logger.info('Redirecting to: %s' % self.flags.upstream)
        if threading.current_thread() == threading.main_thread():
            self._register_signals()

    def shutdown(self) -> None:
        assert self.loop and self.thread
        asyncio.run_coroutine_threadsafe(
            self._shutdown(), self.loop,
        ).result()
        self.loop.call_soon_threadsafe(self.loop.stop)
        self.thread.join()
        self.loop.close()
        logger.debug('Proxy shutdown successful')

    async def _shutdown(self) -> None:
        assert self.server
        self.server.close()
        # Cancel in-flight requests e.g. those sleeping within a delay
        tasks = [
            t for t in asyncio.all_tasks()
            if t is not asyncio.current_task()
        ]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await self.server.wait_closed()

    def _register_signals(self) -> None:
        signal.signal(signal.SIGINT, self._handle_exit_signal)
        signal.signal(signal.SIGTERM, self._handle_exit_signal)
        if not IS_WINDOWS:
            if hasattr(signal, 'SIGINFO'):
                signal.signal(      # pragma: no cover
                    signal.SIGINFO,       # pylint: disable=E1101
                    self._handle_siginfo,
                )
            signal.signal(signal.SIGHUP, self._handle_exit_signal)

    @staticmethod
    def _handle_exit_signal(signum: int, _frame: Any) -> None:
        logger.debug('Received signal %d' % signum)
        sys.exit(0)

    def _handle_siginfo(self, _signum: int, _frame: Any) -> None:
        pprint.pprint(self.flags.__dict__)  # pragma: no cover
        pprint.pprint(self.ledger.snapshot() if self.ledger else {})  # pragma: no cover


def sleep_loop(p: Optional[FaultProxy] = None) -> None:
    while True:
        try:
            time.sleep(1)
        except KeyboardInterrupt:
            break


def main(**opts: Any) -> None:
    try:
        with FaultProxy(sys.argv[1:], **opts) as p:
            sleep_loop(p)
    except ConfigurationError as e:
        print('faultproxy: %s' % e, file=sys.stderr)
        sys.exit(1)


def entry_point() -> None:
    main()
