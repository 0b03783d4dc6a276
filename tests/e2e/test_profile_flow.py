"""Editing account details as a signed-in customer."""

from __future__ import annotations

import pytest

from tests.e2e.pages import AccountPage, LoginPage, ProfilePage


@pytest.mark.e2e
class TestEditProfile:

    @pytest.fixture()
    def profile(self, account, login_page: LoginPage, settings) -> ProfilePage:
        username, password = account
        login_page.login(username, password)
        login_page.expect_redirected_to_account()
        AccountPage(login_page.page, settings.base_url, settings.timeout_ms).open_edit_profile()
        return ProfilePage(login_page.page, settings.base_url, settings.timeout_ms)

    def test_edit_telephone_is_saved(self, profile: ProfilePage, data_factory):
        telephone = data_factory.registration_record().telephone

        profile.update(telephone=telephone)

        profile.expect_saved()
        profile.navigate()
        assert profile.field_value("telephone") == telephone

    def test_edit_first_name_is_saved(self, profile: ProfilePage, data_factory):
        first_name = data_factory.registration_record().first_name

        profile.edit_field("first_name", first_name)
        profile.save()

        assert "successfully updated" in profile.success_message()
        profile.navigate()
        assert profile.field_value("first_name") == first_name
