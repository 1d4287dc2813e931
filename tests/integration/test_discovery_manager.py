"""
Integration tests for the discovery manager.
"""
import time

import pytest
from unittest.mock import patch

from subsift.core.discovery_manager import DiscoveryManager, run
from subsift.core.interfaces import DiscoveryModule, Result, Outcome
from subsift.core.exceptions import APIError, NetworkError, ConfigurationError


class MockDiscoveryModule(DiscoveryModule):
    """Mock discovery module for testing."""

    def __init__(self, domain, **kwargs):
        super().__init__(domain, **kwargs)
        self.error = kwargs.get('error')
        self.mock_subdomains = kwargs.get('mock_subdomains', [])
        self.delay = kwargs.get('delay', 0)
        self.calls = 0

    def discover(self):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.mock_subdomains


def build_manager(behaviours, **kwargs):
    """Create a manager whose sources are replaced by mock modules."""
    manager = DiscoveryManager("example.com", **kwargs)
    for name in manager.sources:
        manager.register_module(name, MockDiscoveryModule, **behaviours.get(name, {}))
    return manager


class TestDiscoveryManagerIntegration:
    """Integration tests for the discovery manager."""

    def test_declared_sources(self):
        manager = DiscoveryManager("example.com")
        assert manager.sources == ['crt.sh', 'hackertarget', 'alienvault']

    def test_source_selection_keeps_declaration_order(self):
        manager = DiscoveryManager("example.com", sources=['alienvault', 'crt.sh'])
        assert manager.sources == ['crt.sh', 'alienvault']

    def test_unknown_source(self):
        with pytest.raises(ConfigurationError):
            DiscoveryManager("example.com", sources=['virustotal'])

    @pytest.mark.parametrize("kwargs", [{"concurrency": 0}, {"timeout": 0}])
    def test_invalid_limits(self, kwargs):
        with pytest.raises(ConfigurationError):
            DiscoveryManager("example.com", **kwargs)

    def test_load_modules(self):
        manager = DiscoveryManager("example.com", timeout=7)
        manager.load_modules()

        assert [module.name for module in manager.modules] == ['crt.sh', 'hackertarget', 'alienvault']
        assert all(module.timeout == 7 for module in manager.modules)

    @pytest.mark.parametrize("concurrency", [1, 3])
    def test_merge_and_summary(self, concurrency):
        manager = build_manager({
            'crt.sh': {'mock_subdomains': ['a.example.com', 'b.example.com']},
            'hackertarget': {'mock_subdomains': ['b.example.com', 'c.example.com']},
            'alienvault': {'mock_subdomains': ['c.example.com']},
        }, concurrency=concurrency)

        result = manager.discover()

        assert isinstance(result, Result)
        assert result.outcome is Outcome.FOUND
        assert result.subdomains == ['a.example.com', 'b.example.com', 'c.example.com']
        assert result.summary == ['crt.sh: 2', 'hackertarget: 2', 'alienvault: 1']

    @pytest.mark.parametrize("concurrency", [1, 3])
    def test_failing_source_is_isolated(self, concurrency):
        manager = build_manager({
            'crt.sh': {'mock_subdomains': ['www.example.com']},
            'hackertarget': {'error': NetworkError("Timeout connecting to hackertarget")},
            'alienvault': {'mock_subdomains': ['api.example.com']},
        }, concurrency=concurrency)

        result = manager.discover()

        assert [source.success for source in result.sources] == [True, False, True]
        assert result.sources[1].error == "Timeout connecting to hackertarget"
        assert result.summary[1] == "hackertarget: Timeout connecting to hackertarget"
        assert result.subdomains == ['api.example.com', 'www.example.com']
        assert result.outcome is Outcome.FOUND

    def test_unexpected_exception_is_isolated(self):
        manager = build_manager({
            'crt.sh': {'error': KeyError('name_value')},
            'hackertarget': {'mock_subdomains': ['www.example.com']},
        })

        result = manager.discover()

        assert result.sources[0].success is False
        assert result.sources[1].success is True
        assert result.sources[2].success is True

    def test_all_sources_fail(self):
        manager = build_manager({
            'crt.sh': {'error': APIError("Empty response")},
            'hackertarget': {'error': APIError("API count exceeded")},
            'alienvault': {'error': NetworkError("Connection error")},
        })

        result = manager.discover()

        assert result.subdomains == []
        assert result.outcome is Outcome.NOT_FOUND
        assert result.summary == [
            'crt.sh: Empty response',
            'hackertarget: API count exceeded',
            'alienvault: Connection error',
        ]

    def test_all_sources_empty(self):
        result = build_manager({}).discover()

        assert result.outcome is Outcome.NOT_FOUND
        assert all(source.success for source in result.sources)

    def test_each_source_runs_once(self):
        manager = build_manager({'crt.sh': {'error': APIError("Empty response")}})
        manager.discover()

        assert [module.calls for module in manager.modules] == [1, 1, 1]

    def test_summary_order_independent_of_completion(self):
        manager = build_manager({
            'crt.sh': {'mock_subdomains': ['slow.example.com'], 'delay': 0.2},
            'hackertarget': {'mock_subdomains': ['mid.example.com'], 'delay': 0.1},
            'alienvault': {'mock_subdomains': ['fast.example.com']},
        }, concurrency=3)

        result = manager.discover()

        assert [source.name for source in result.sources] == ['crt.sh', 'hackertarget', 'alienvault']

    def test_resolve(self):
        manager = build_manager({
            'crt.sh': {'mock_subdomains': ['www.example.com']},
        }, resolve=True)

        with patch('subsift.core.discovery_manager.DNSUtils') as mock_dns_utils:
            mock_dns_utils.return_value.resolve_many.return_value = {
                'www.example.com': ['192.0.2.10']
            }
            result = manager.discover()

        assert result.resolved == {'www.example.com': ['192.0.2.10']}

    @patch('subsift.utils.http_utils.HTTPUtils.make_request')
    def test_run_with_real_modules(self, mock_request, make_response):
        """End to end through the real modules with the HTTP layer mocked."""
        def respond(url, method='GET', params=None, headers=None):
            if 'crt.sh' in url:
                return make_response([{"name_value": "*.a.example.com\nb.example.com"}])
            if 'hackertarget' in url:
                return make_response(text="API count exceeded - Increase Quota with Membership")
            raise NetworkError(f"Timeout connecting to {url}")

        mock_request.side_effect = respond

        result = run("example.com", concurrency=1)

        assert result.subdomains == ['a.example.com', 'b.example.com']
        assert result.summary[0] == 'crt.sh: 2'
        assert result.summary[1].startswith('hackertarget: API count exceeded')
        assert result.summary[2].startswith('alienvault: Timeout connecting to')

    @patch('subsift.utils.http_utils.HTTPUtils.make_request')
    def test_hostsearch_hostname_containing_error(self, mock_request, make_response):
        def respond(url, method='GET', params=None, headers=None):
            if 'hackertarget' in url:
                return make_response(text="www.example.com,192.0.2.1\nerror-pages.example.com,192.0.2.2\n")
            raise NetworkError(f"Timeout connecting to {url}")

        mock_request.side_effect = respond

        result = run("example.com")

        assert result.sources[1].success is True
        assert result.summary[1] == 'hackertarget: 2'
        assert result.subdomains == ['error-pages.example.com', 'www.example.com']
