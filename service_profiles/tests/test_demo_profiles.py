"""
Unit tests for DemoProfileProvider.
"""

from datetime import datetime, timedelta, timezone

import pytest

from service_profiles.app.demo import DemoProfileProvider
from service_profiles.app.search import SearchCriteria, paginate


class TestDemoProfileProvider:
    """Test cases for DemoProfileProvider."""

    @pytest.fixture
    def now(self):
        return datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)

    @pytest.fixture
    def provider(self, now):
        """Create provider with a fixed clock."""
        return DemoProfileProvider(pool_size=50, max_profiles=30, clock=lambda: now)

    def test_generate_profiles(self, provider):
        """Test generated summaries follow the fixed tables."""
        profiles = provider.generate_profiles(16)

        assert len(profiles) == 16
        assert profiles[0].name == "Emma Johnson"
        assert profiles[0].city == "Stockholm"
        assert [profile.age for profile in profiles[:3]] == [22, 23, 24]
        assert profiles[15].age == 22
        assert profiles[3].is_verified is True
        assert profiles[4].is_online is False

    def test_generate_profiles_bounds_count(self, provider):
        """Test count is clamped to [0, max_profiles]."""
        assert provider.generate_profiles(-3) == []
        assert len(provider.generate_profiles(500)) == 30

    def test_last_active_within_a_day(self, provider, now):
        """Test activity timestamps lie in the last 24 hours."""
        for profile in provider.generate_profiles(30):
            assert now - timedelta(days=1) < profile.last_active_at <= now

    def test_candidates_are_deterministic(self, provider):
        """Test the pool is identical across calls."""
        assert provider.candidates() == provider.candidates()
        assert len(provider.candidates()) == 50

    def test_candidates_feed_pagination(self, provider):
        """Test demo candidates satisfy the age protocol."""
        result = paginate(provider.candidates(), SearchCriteria(min_age=36, page=1, page_size=10))

        assert [profile.id for profile in result.items] == [15, 30, 45]

    def test_profile_detail(self, provider, now):
        """Test detailed profile fields."""
        detail = provider.profile_detail(10)

        assert detail.id == 10
        assert detail.email == "demo.user.10@example.com"
        assert detail.gender == "Female"
        assert detail.height == 170
        assert detail.is_premium is True
        assert detail.subscription_type == "Premium"
        assert detail.instagram_handle == "@harperwilson"
        assert detail.hobby_list == "Business, Travel, Innovation"
        assert detail.created_at < now

    def test_detail_serializes_camel_case(self, provider):
        """Test the JSON shape uses camelCase keys."""
        payload = provider.profile_detail(3).model_dump(mode="json", by_alias=True)

        assert "primaryPhotoUrl" in payload
        assert "isPremium" in payload
        assert "primary_photo_url" not in payload
