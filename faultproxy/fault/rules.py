# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    .. spelling::

       classifier
"""
import json
from typing import (
    Any, Dict, List, Tuple, Union, Generic, TypeVar, Iterable, Iterator,
    Optional, NamedTuple,
)

from ..exception import ConfigurationError
from ..common.utils import text_, bytes_
from ..common.constants import SLASH, UNLIMITED_FAILURES


DelayRule = NamedTuple(
    'DelayRule', [
        ('pattern', bytes),
        ('delay_ms', int),
    ],
)

FailureRule = NamedTuple(
    'FailureRule', [
        ('pattern', bytes),
        ('times', int),
        ('status_code', int),
    ],
)

R = TypeVar('R', DelayRule, FailureRule)


class RuleTable(Generic[R]):
    """Ordered, immutable table of endpoint rules.

    Rules are matched by plain path prefix, no wildcard or regex.
    When several patterns match, the first declared one wins.  Note that
    ``/api/user/features`` also matches ``/api/user/features2``.
    """

    def __init__(self, rules: Optional[Iterable[R]] = None) -> None:
        self._rules: Tuple[R, ...] = tuple(rules or ())

    def match(self, path: Optional[bytes]) -> Optional[R]:
        """Returns first rule whose pattern is a prefix of path."""
        if path is None:
            return None
        for rule in self._rules:
            if path.startswith(rule.pattern):
                return rule
        return None

    def __iter__(self) -> Iterator[R]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return '%s(%r)' % (self.__class__.__name__, list(self._rules))


def _pattern(raw: Any) -> bytes:
    if not isinstance(raw, (str, bytes)):
        raise ConfigurationError('Path prefix must be a string, got %r' % (raw,))
    pattern = bytes_(raw)
    if not pattern.startswith(SLASH):
        raise ConfigurationError(
            'Path prefix must start with "/", got %r' % text_(pattern),
        )
    return pattern


def _integer(raw: Any, what: str) -> int:
    # bool is an int subclass
    if isinstance(raw, (bool, float)):
        raise ConfigurationError('Invalid %s %r' % (what, raw))
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError('Invalid %s %r' % (what, raw))


def delay_rule(pattern: Any, delay_ms: Any) -> DelayRule:
    """Validate and build a :class:`DelayRule`."""
    ms = _integer(delay_ms, 'delay')
    if ms < 0:
        raise ConfigurationError('Delay must be >= 0, got %d' % ms)
    return DelayRule(_pattern(pattern), ms)


def failure_rule(pattern: Any, times: Any, status_code: Any) -> FailureRule:
    """Validate and build a :class:`FailureRule`.

    ``times=-1`` fails forever, ``times=0`` never fails."""
    budget = _integer(times, 'failure count')
    if budget < UNLIMITED_FAILURES:
        raise ConfigurationError(
            'Failure count must be >= %d, got %d' % (UNLIMITED_FAILURES, budget),
        )
    code = _integer(status_code, 'status code')
    if not 200 <= code <= 599:
        raise ConfigurationError('Status code must be within 200-599, got %d' % code)
    return FailureRule(_pattern(pattern), budget, code)


def parse_delay_flag(raw: str) -> DelayRule:
    """Parse ``--delay /api/user/features=5000``."""
    pattern, sep, ms = raw.rpartition('=')
    if not sep:
        raise ConfigurationError(
            'Invalid --delay %r, expected PREFIX=MILLISECONDS' % raw,
        )
    return delay_rule(pattern, ms)


def parse_failure_flag(raw: str) -> FailureRule:
    """Parse ``--fail /api/user/features=4:400``."""
    pattern, sep, value = raw.rpartition('=')
    times, colon, status_code = value.partition(':')
    if not sep or not colon:
        raise ConfigurationError(
            'Invalid --fail %r, expected PREFIX=TIMES:STATUS' % raw,
        )
    return failure_rule(pattern, times, status_code)


def _entry(entry: Any, keys: Tuple[str, ...], source: str) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        raise ConfigurationError('Invalid rule %r in %s' % (entry, source))
    missing = [k for k in keys if k not in entry]
    unknown = [k for k in entry if k not in keys]
    if missing or unknown:
        raise ConfigurationError(
            'Invalid rule %r in %s, expected keys %s' % (entry, source, ', '.join(keys)),
        )
    return entry


def load_rules_file(path: str) -> Tuple[List[DelayRule], List[FailureRule]]:
    """Load delay and failure tables from a JSON rules file::

        {
            "delays": [{"path": "/api/user/features", "delay_ms": 5000}],
            "failures": [{"path": "/api/user/features", "times": 4, "status_code": 400}]
        }
    """
    try:
        with open(path, 'rb') as f:
            config = json.load(f)
    except OSError as e:
        raise ConfigurationError('Unable to read rules file %s: %s' % (path, e))
    except ValueError as e:
        raise ConfigurationError('Malformed rules file %s: %s' % (path, e))
    if not isinstance(config, dict) or \
            any(k not in ('delays', 'failures') for k in config):
        raise ConfigurationError(
            'Rules file %s must be an object with "delays" and/or "failures"' % path,
        )
    delays, failures = config.get('delays', []), config.get('failures', [])
    if not isinstance(delays, list) or not isinstance(failures, list):
        raise ConfigurationError('Rules in %s must be lists' % path)
    return [
        delay_rule(e['path'], e['delay_ms'])
        for e in (_entry(d, ('path', 'delay_ms'), path) for d in delays)
    ], [
        failure_rule(e['path'], e['times'], e['status_code'])
        for e in (_entry(f, ('path', 'times', 'status_code'), path) for f in failures)
    ]


def resolve_rules(
        rules: Iterable[Union[DelayRule, FailureRule, Tuple[Any, ...]]],
        klass: Any,
) -> List[Any]:
    """Validate rules passed programmatically, as rule objects or plain tuples."""
    builder = delay_rule if klass is DelayRule else failure_rule
    resolved = []
    for rule in rules:
        if not isinstance(rule, (tuple, list)):
            raise ConfigurationError('Invalid %s %r' % (klass.__name__, rule))
        try:
            resolved.append(builder(*rule))
        except TypeError:
            raise ConfigurationError('Invalid %s %r' % (klass.__name__, rule))
    return resolved
