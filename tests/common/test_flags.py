# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import json
import ipaddress
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from faultproxy.fault import DelayRule, FailureRule
from faultproxy.exception import ConfigurationError
from faultproxy.common.flag import FlagParser, flags as global_flags
from faultproxy.common.constants import DEFAULT_PORT, DEFAULT_BACKLOG


class TestFlags(unittest.TestCase):

    def test_defaults(self) -> None:
        flags = FlagParser.initialize(['--upstream', 'https://api.example.com'])
        self.assertEqual(flags.hostname, ipaddress.ip_address('127.0.0.1'))
        self.assertEqual(flags.port, DEFAULT_PORT)
        self.assertEqual(flags.backlog, DEFAULT_BACKLOG)
        self.assertIsNone(flags.timeout)
        self.assertEqual(len(flags.delays), 0)
        self.assertEqual(len(flags.failures), 0)

    def test_help_epilog(self) -> None:
        epilog = global_flags.parser.epilog
        self.assertIn('--log-level DEBUG', epilog)
        self.assertNotIn('github.com', epilog)

    def test_upstream_is_required(self) -> None:
        with self.assertRaises(ConfigurationError):
            FlagParser.initialize([])

    def test_upstream_parsed(self) -> None:
        flags = FlagParser.initialize(['--upstream', 'http://localhost:8080'])
        self.assertEqual(flags.upstream.scheme, b'http')
        self.assertEqual(flags.upstream.hostname, b'localhost')
        self.assertEqual(flags.upstream.port, 8080)
        self.assertIsNone(flags.upstream.remainder)

    def test_upstream_trailing_slash_stripped(self) -> None:
        flags = FlagParser.initialize([], upstream='https://api.example.com/v1/')
        self.assertEqual(flags.upstream.remainder, b'/v1')
        flags = FlagParser.initialize([], upstream='https://api.example.com/')
        self.assertIsNone(flags.upstream.remainder)

    def test_invalid_upstream(self) -> None:
        for upstream in (
            'ftp://example.com',
            'example.com',
            '/relative',
            'http://',
            'http://example.com:99999',
        ):
            with self.assertRaises(ConfigurationError, msg=upstream):
                FlagParser.initialize([], upstream=upstream)

    def test_rules_from_flags(self) -> None:
        flags = FlagParser.initialize([
            '--upstream', 'https://api.example.com',
            '--delay', '/api/user/features=5000',
            '--delay', '/api=100',
            '--fail', '/api/user/features=4:400',
            '--fail', '/api/orders=-1:503',
        ])
        self.assertEqual(
            list(flags.delays),
            [
                DelayRule(b'/api/user/features', 5000),
                DelayRule(b'/api', 100),
            ],
        )
        self.assertEqual(
            list(flags.failures),
            [
                FailureRule(b'/api/user/features', 4, 400),
                FailureRule(b'/api/orders', -1, 503),
            ],
        )

    def test_rules_file_precedes_flags(self) -> None:
        with TemporaryDirectory() as tmp:
            rules_file = Path(tmp) / 'rules.json'
            rules_file.write_text(json.dumps({
                'delays': [{'path': '/api/user/features', 'delay_ms': 5000}],
                'failures': [{'path': '/api/user/features', 'times': 4, 'status_code': 400}],
            }))
            flags = FlagParser.initialize([
                '--upstream', 'https://api.example.com',
                '--rules-file', str(rules_file),
                '--delay', '/api=10',
                '--fail', '/api=1:500',
            ])
        self.assertEqual(
            list(flags.delays),
            [DelayRule(b'/api/user/features', 5000), DelayRule(b'/api', 10)],
        )
        self.assertEqual(
            list(flags.failures),
            [FailureRule(b'/api/user/features', 4, 400), FailureRule(b'/api', 1, 500)],
        )

    def test_opts_override_rules(self) -> None:
        flags = FlagParser.initialize(
            ['--delay', '/ignored=10'],
            upstream='https://api.example.com',
            delays=[('/api/user/features', 5000)],
            failures=[FailureRule(b'/api/user/features', 4, 400)],
        )
        self.assertEqual(list(flags.delays), [DelayRule(b'/api/user/features', 5000)])
        self.assertEqual(list(flags.failures), [FailureRule(b'/api/user/features', 4, 400)])

    def test_invalid_rules(self) -> None:
        for args in (
            ['--delay', '/api'],
            ['--delay', '/api=-1'],
            ['--delay', 'api=10'],
            ['--fail', '/api=4'],
            ['--fail', '/api=-2:400'],
            ['--fail', '/api=4:700'],
            ['--fail', '/api=4:abc'],
        ):
            with self.assertRaises(ConfigurationError, msg=args):
                FlagParser.initialize(args, upstream='https://api.example.com')

    def test_opts_override_flags(self) -> None:
        flags = FlagParser.initialize(
            ['--port', '9999', '--timeout', '1.5'],
            upstream='https://api.example.com',
            port=0,
            hostname='::1',
        )
        self.assertEqual(flags.port, 0)
        self.assertEqual(flags.timeout, 1.5)
        self.assertEqual(flags.hostname, ipaddress.ip_address('::1'))

    def test_invalid_values(self) -> None:
        for opts in (
            {'port': 70000},
            {'timeout': 0},
            {'hostname': 'localhost'},
            {'log_level': 'x'},
        ):
            with self.assertRaises(ConfigurationError, msg=opts):
                FlagParser.initialize([], upstream='https://api.example.com', **opts)
