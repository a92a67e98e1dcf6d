"""
Unit tests for RedPacketConfig get_config and set_config functions.

This module tests the global configuration management functionality.
"""

from unittest.mock import patch

import pytest

from redpacket.claim_allocator import ClaimAllocator
from redpacket.config.default_redpacket_config import DefaultRedPacketConfig
from redpacket.config.redpacket_config import RedPacketConfig, get_config, set_config
from redpacket.mem.memory_packet_store import MemoryPacketStore


class MockRedPacketConfig(RedPacketConfig):
    """Mock RedPacketConfig for testing that doesn't require arguments"""

    def get_max_claim_attempts(self):
        return 3

    def get_retry_base_delay(self):
        return 0

    def get_retry_max_delay(self):
        return 0

    def get_max_share_count(self):
        return 10


class TestRedPacketConfigFunctions:
    """Test cases for get_config and set_config functions"""

    def setup_method(self):
        """Reset global config before each test"""
        set_config(None)

    def teardown_method(self):
        """Clean up global config after each test"""
        set_config(None)

    def test_get_config_default(self):
        with patch.dict('os.environ', {}, clear=True):
            config = get_config()
        assert isinstance(config, DefaultRedPacketConfig)
        assert config.get_max_claim_attempts() == 1000

    @patch.dict(
        'os.environ',
        {'REDPACKET_CONFIG': 'tests.test_redpacket_config.MockRedPacketConfig'},
    )
    def test_get_config_returns_mock_config(self):
        config = get_config()

        assert isinstance(config, MockRedPacketConfig)
        assert config.get_max_share_count() == 10

        # Subsequent calls return the same instance
        assert get_config() is config

    @patch.dict('os.environ', {'REDPACKET_CONFIG': 'builtins.dict'})
    def test_get_config_wrong_type(self):
        with pytest.raises(TypeError):
            get_config()

    def test_set_config_and_get_config(self):
        custom_config = DefaultRedPacketConfig(max_claim_attempts=None)

        set_config(custom_config)

        assert get_config() is custom_config
        assert get_config().get_max_claim_attempts() is None

    def test_allocator_uses_global_config(self):
        custom_config = MockRedPacketConfig()
        set_config(custom_config)

        allocator = ClaimAllocator(store=MemoryPacketStore())

        assert allocator.config is custom_config
