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
import argparse
import ipaddress
from typing import Any, List, Optional, cast

from .utils import bytes_
from .logger import Logger
from .version import __version__
from .constants import SLASH
from ..exception import ConfigurationError
from ..fault.rules import (
    RuleTable, DelayRule, FailureRule, load_rules_file, resolve_rules,
    parse_delay_flag, parse_failure_flag,
)
from ..http.url import Url
from ..http.exception import HttpProtocolException


class FlagParser:
    """Wrapper around argparse module.

    Import `flag.flags` and use `add_argument` API
    to define custom flags within respective Python files.

    Define flags at the top of your module files, never within
    class ``__init__`` or methods.  A flag registered twice results
    into runtime exception.
    """

    def __init__(self) -> None:
        self.args: Optional[argparse.Namespace] = None
        self.actions: List[str] = []
        self.parser = argparse.ArgumentParser(
            description='faultproxy v%s' % __version__,
            epilog='faultproxy not working? Re-run with --log-level DEBUG for details.',
        )

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action:
        """Register a flag."""
        action = self.parser.add_argument(*args, **kwargs)
        self.actions.append(action.dest)
        return action

    def parse_args(
            self, input_args: Optional[List[str]],
    ) -> argparse.Namespace:
        """Parse flags from input arguments."""
        self.args = self.parser.parse_args(input_args)
        return self.args

    @staticmethod
    def initialize(
        input_args: Optional[List[str]] = None,
        **opts: Any,
    ) -> argparse.Namespace:
        """Parse flags and resolve final configuration.

        Keyword ``opts`` take precedence over parsed flags.  Raises
        :exc:`ConfigurationError` for any invalid value, rule tables
        are fully validated before the proxy starts serving."""
        if input_args is None:
            input_args = []

        args = flags.parse_args(input_args)

        # Print version and exit
        if args.version:
            print(__version__)
            sys.exit(0)

        # Setup logging module
        args.log_file = opts.get('log_file', args.log_file)
        args.log_level = opts.get('log_level', args.log_level)
        args.log_format = opts.get('log_format', args.log_format)
        try:
            Logger.setup(args.log_file, args.log_level, args.log_format)
        except ValueError as e:
            raise ConfigurationError(str(e))

        try:
            args.hostname = ipaddress.ip_address(
                opts.get('hostname', args.hostname),
            )
        except ValueError as e:
            raise ConfigurationError(str(e))
        args.port = cast(int, opts.get('port', args.port))
        if not 0 <= args.port <= 65535:
            raise ConfigurationError('Invalid port %d' % args.port)
        args.backlog = cast(int, opts.get('backlog', args.backlog))

        args.upstream = FlagParser.resolve_upstream(
            opts.get('upstream', args.upstream),
        )
        args.timeout = cast(Optional[float], opts.get('timeout', args.timeout))
        if args.timeout is not None and args.timeout <= 0:
            raise ConfigurationError('Invalid timeout %r' % args.timeout)

        # Rule tables.  Rules file entries come first, followed
        # by --delay and --fail flags, in declaration order.
        delays: List[DelayRule] = []
        failures: List[FailureRule] = []
        args.rules_file = opts.get('rules_file', args.rules_file)
        if args.rules_file:
            delays, failures = load_rules_file(args.rules_file)
        delays += [parse_delay_flag(raw) for raw in args.delay or []]
        failures += [parse_failure_flag(raw) for raw in args.fail or []]
        if 'delays' in opts:
            delays = resolve_rules(opts['delays'], DelayRule)
        if 'failures' in opts:
            failures = resolve_rules(opts['failures'], FailureRule)
        args.delays = RuleTable(delays)
        args.failures = RuleTable(failures)

        return args

    @staticmethod
    def resolve_upstream(upstream: Any) -> Url:
        """Parse upstream base URL, trailing slash removed."""
        if not upstream:
            raise ConfigurationError('Upstream base URL is required, see --upstream')
        try:
            url = Url.from_bytes(bytes_(upstream))
        except HttpProtocolException as e:
            raise ConfigurationError('Invalid upstream: %s' % e)
        if url.scheme is None or url.hostname is None:
            raise ConfigurationError('Invalid upstream %r' % upstream)
        if url.remainder is not None:
            url.remainder = url.remainder.rstrip(SLASH) or None
        return url


flags = FlagParser()
