# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import io
import unittest
from unittest import mock

from faultproxy.proxy import main, entry_point
from faultproxy.common.version import __version__


class TestMain(unittest.TestCase):

    @mock.patch('time.sleep')
    @mock.patch('faultproxy.proxy.FaultProxy.shutdown')
    @mock.patch('faultproxy.proxy.FaultProxy.setup')
    def test_entry_point(
            self,
            mock_setup: mock.Mock,
            mock_shutdown: mock.Mock,
            mock_sleep: mock.Mock,
    ) -> None:
        mock_sleep.side_effect = KeyboardInterrupt()
        with mock.patch(
            'sys.argv', [
                'faultproxy',
                '--upstream', 'https://api.example.com',
                '--delay', '/api=10',
            ],
        ):
            entry_point()
        mock_setup.assert_called_once()
        mock_shutdown.assert_called_once()
        mock_sleep.assert_called()

    @mock.patch('time.sleep')
    def test_main_serves_until_interrupted(self, mock_sleep: mock.Mock) -> None:
        mock_sleep.side_effect = KeyboardInterrupt()
        with mock.patch('sys.argv', ['faultproxy']):
            main(upstream='http://127.0.0.1:8080', port=0)
        mock_sleep.assert_called_once_with(1)

    @mock.patch('sys.stderr', new_callable=io.StringIO)
    @mock.patch('faultproxy.proxy.FaultProxy.setup')
    def test_configuration_error_exits(
            self,
            mock_setup: mock.Mock,
            mock_stderr: io.StringIO,
    ) -> None:
        with mock.patch('sys.argv', ['faultproxy', '--fail', '/api=4:999']):
            with self.assertRaises(SystemExit) as ctx:
                main(upstream='https://api.example.com')
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn('Status code must be within 200-599', mock_stderr.getvalue())
        mock_setup.assert_not_called()

    @mock.patch('sys.stderr', new_callable=io.StringIO)
    def test_missing_upstream_exits(self, mock_stderr: io.StringIO) -> None:
        with mock.patch('sys.argv', ['faultproxy']):
            with self.assertRaises(SystemExit) as ctx:
                entry_point()
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn('--upstream', mock_stderr.getvalue())

    @mock.patch('sys.stdout', new_callable=io.StringIO)
    def test_version(self, mock_stdout: io.StringIO) -> None:
        with mock.patch('sys.argv', ['faultproxy', '--version']):
            with self.assertRaises(SystemExit) as ctx:
                entry_point()
        self.assertEqual(ctx.exception.code, 0)
        self.assertEqual(mock_stdout.getvalue().strip(), __version__)
