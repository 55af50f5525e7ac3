"""
User model tests.
"""

from sbsource.user import User


class TestUserFromRecord:
    """Records are copied verbatim without defaults for absent fields."""

    def test_fields_copied(self, raw_users, api_url):
        user = User.from_record(raw_users[1], api_url)
        assert user.id == 2
        assert user.username == "snail"
        assert user.avatar_file_id == 2222
        assert user.create_date == "2020-02-01T00:00:00"
        assert user.special == "moderator"
        assert user.banned is False
        assert user.is_privileged is False
        assert user.registered is True
        assert user.api_url == api_url

    def test_absent_optional_field_stays_absent(self, raw_users, api_url):
        user = User.from_record(raw_users[0], api_url)
        assert user.special is None
        assert "special" not in user.to_record()

    def test_record_round_trips(self, raw_users, api_url):
        for raw in raw_users:
            assert User.from_record(raw, api_url).to_record() == raw

    def test_unknown_fields_are_kept(self, api_url):
        user = User.from_record({"id": 5, "username": "x", "lastPost": 12}, api_url)
        assert user.model_extra == {"lastPost": 12}

    def test_empty_record(self, api_url):
        user = User.from_record({}, api_url)
        assert user.id is None


class TestAvatarLink:
    def test_default_size(self, raw_users, api_url):
        user = User.from_record(raw_users[0], api_url)
        assert (
            user.get_avatar_link()
            == "https://smilebasicsource.com/api/File/raw/1111?size=256&crop=true"
        )

    def test_custom_size(self, raw_users, api_url):
        user = User.from_record(raw_users[0], api_url)
        assert user.get_avatar_link(64).endswith("File/raw/1111?size=64&crop=true")

    def test_missing_avatar_still_formats(self, api_url):
        user = User.from_record({"id": 3}, api_url)
        assert user.get_avatar_link() == f"{api_url}File/raw/None?size=256&crop=true"
