"""Tests for loading hook callables from dotted paths."""

from __future__ import annotations

import pytest

from acmewell.hooks.loader import HookLoadError, load_callable


class TestLoadCallable:
    def test_loads_function(self):
        assert load_callable("json.dumps") is __import__("json").dumps

    def test_loads_from_nested_module(self):
        from acmewell.services.poller import backoff_delay

        assert load_callable("acmewell.services.poller.backoff_delay") is backoff_delay

    @pytest.mark.parametrize("path", ["dumps", "json.", "1json.dumps", "json dumps", ""])
    def test_malformed_paths(self, path):
        with pytest.raises(HookLoadError, match="Invalid hook path"):
            load_callable(path)

    def test_missing_module(self):
        with pytest.raises(HookLoadError, match="Cannot import"):
            load_callable("acmewell_no_such_module.fn")

    def test_missing_attribute(self):
        with pytest.raises(HookLoadError, match="no attribute"):
            load_callable("json.no_such_function")

    def test_not_callable(self):
        with pytest.raises(HookLoadError, match="not callable"):
            load_callable("acmewell.core.types.CHALLENGE_PREFIX")
