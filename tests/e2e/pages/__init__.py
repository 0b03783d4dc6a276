"""Page Object Model classes for E2E testing."""

from .account_page import AccountPage
from .base_page import BasePage
from .home_page import HomePage
from .login_page import LoginPage
from .profile_page import ProfilePage
from .registration_page import RegistrationPage
from .search_results_page import SearchResultsPage

__all__ = [
    "AccountPage",
    "BasePage",
    "HomePage",
    "LoginPage",
    "ProfilePage",
    "RegistrationPage",
    "SearchResultsPage",
]
