"""Seeded generator for registration, login and search test data.

Valid records satisfy every field rule the storefront enforces on its
registration form. Negative-path records are valid records with exactly one
rule broken, so the scenario can assert on a single validation message.
"""

from __future__ import annotations

import random
import re
import secrets
import string
from dataclasses import dataclass, replace

from storefront_e2e.utils.config import Settings
from storefront_e2e.utils.logging_utils import get_logger

logger = get_logger("data")

USERNAME_MIN_LENGTH = 5
USERNAME_MAX_LENGTH = 64
PASSWORD_MIN_LENGTH = 4
PASSWORD_MAX_LENGTH = 20
NAME_MAX_LENGTH = 32
ADDRESS_MIN_LENGTH = 3
POSTCODE_MIN_LENGTH = 3
POSTCODE_MAX_LENGTH = 10

EMAIL_DOMAIN = "example.com"
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[a-zA-Z]{2,}")

FIRST_NAMES = ("Ada", "Grace", "Alan", "Linus", "Barbara", "Ken", "Margaret", "Dennis")
LAST_NAMES = ("Lovelace", "Hopper", "Turing", "Torvalds", "Liskov", "Thompson", "Hamilton")
STREETS = ("High Street", "Station Road", "Church Lane", "Park Avenue", "Mill Road")
CITIES = ("London", "Manchester", "Bristol", "Leeds", "Glasgow", "Cardiff")

# Terms known to match at least one catalogue product by name.
MATCHING_SEARCH_TERMS = ("Shirt", "Shoes", "Cream")


@dataclass(frozen=True)
class RegistrationRecord:
    """Values for one submission of the account registration form."""

    first_name: str
    last_name: str
    email: str
    telephone: str
    address: str
    city: str
    postcode: str
    username: str
    password: str
    region: str | None = None


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


class TestDataFactory:
    """Produces test data from a private ``random.Random``.

    Pass ``seed`` to make a run reproducible. Usernames and emails issued by
    one factory never repeat. They carry a per-run token that does not come
    from the seed, so repeated seeded runs never reuse a login name on the
    storefront.
    """

    __test__ = False  # not a pytest test class

    def __init__(self, seed: int | str | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        self._run_token = secrets.token_hex(3)
        self._counter = 0
        self._issued: set[str] = set()

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _token(self, length: int, alphabet: str = string.ascii_lowercase + string.digits) -> str:
        return "".join(self._rng.choice(alphabet) for _ in range(length))

    def _unique_username(self) -> str:
        while True:
            self._counter += 1
            candidate = f"qa{self._run_token}{self._counter:03d}{self._token(3)}"
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    def _password(self, length: int = 12) -> str:
        # Mixed classes so the value also passes stricter storefront settings.
        chars = [
            self._rng.choice(string.ascii_uppercase),
            self._rng.choice(string.ascii_lowercase),
            self._rng.choice(string.digits),
        ]
        chars += [self._rng.choice(string.ascii_letters + string.digits) for _ in range(length - 3)]
        self._rng.shuffle(chars)
        return "".join(chars)

    def _telephone(self) -> str:
        return "07" + "".join(self._rng.choice(string.digits) for _ in range(9))

    def _postcode(self) -> str:
        return f"{self._token(2, string.ascii_uppercase)}{self._rng.randint(1, 99)} {self._rng.randint(1, 9)}{self._token(2, string.ascii_uppercase)}"

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def registration_record(self) -> RegistrationRecord:
        """Return a record that passes every registration rule."""
        username = self._unique_username()
        record = RegistrationRecord(
            first_name=self._rng.choice(FIRST_NAMES),
            last_name=self._rng.choice(LAST_NAMES),
            email=f"{username}@{EMAIL_DOMAIN}",
            telephone=self._telephone(),
            address=f"{self._rng.randint(1, 250)} {self._rng.choice(STREETS)}",
            city=self._rng.choice(CITIES),
            postcode=self._postcode(),
            username=username,
            password=self._password(),
        )
        logger.debug("Generated registration record for %s", record.username)
        return record

    def weak_password_record(self) -> RegistrationRecord:
        """Valid record whose password is below the minimum length."""
        return replace(self.registration_record(), password=self._token(PASSWORD_MIN_LENGTH - 1))

    def invalid_email_record(self) -> RegistrationRecord:
        """Valid record whose email has no ``@``."""
        record = self.registration_record()
        return replace(record, email=f"{record.username}.{EMAIL_DOMAIN}")

    def short_username_record(self) -> RegistrationRecord:
        """Valid record whose login name is below the minimum length."""
        return replace(self.registration_record(), username=self._token(USERNAME_MIN_LENGTH - 1, string.ascii_lowercase))

    def duplicate_username_record(self, existing: RegistrationRecord) -> RegistrationRecord:
        """Fresh record reusing the login name of an account that already exists."""
        return replace(self.registration_record(), username=existing.username)

    # ------------------------------------------------------------------
    # Login and search
    # ------------------------------------------------------------------

    @staticmethod
    def credentials_for(record: RegistrationRecord) -> Credentials:
        return Credentials(username=record.username, password=record.password)

    def wrong_password_for(self, account: RegistrationRecord | Credentials) -> Credentials:
        """Credentials for ``account`` with a password that differs from its real one."""
        wrong = self._password()
        while wrong == account.password:
            wrong = self._password()
        return Credentials(username=account.username, password=wrong)

    def search_term(self) -> str:
        return self._rng.choice(MATCHING_SEARCH_TERMS)

    def missing_search_term(self) -> str:
        """A token no product name contains."""
        return f"zzq{self._token(10)}"


def validation_errors(record: RegistrationRecord) -> list[str]:
    """Names of the registration rules ``record`` breaks, in form order."""
    broken = []
    if not 1 <= len(record.first_name) <= NAME_MAX_LENGTH:
        broken.append("first_name")
    if not 1 <= len(record.last_name) <= NAME_MAX_LENGTH:
        broken.append("last_name")
    if not EMAIL_PATTERN.fullmatch(record.email):
        broken.append("email")
    if len(record.address) < ADDRESS_MIN_LENGTH:
        broken.append("address")
    if len(record.city) < ADDRESS_MIN_LENGTH:
        broken.append("city")
    if not POSTCODE_MIN_LENGTH <= len(record.postcode) <= POSTCODE_MAX_LENGTH:
        broken.append("postcode")
    if not (USERNAME_MIN_LENGTH <= len(record.username) <= USERNAME_MAX_LENGTH and record.username.isalnum()):
        broken.append("username")
    if not PASSWORD_MIN_LENGTH <= len(record.password) <= PASSWORD_MAX_LENGTH:
        broken.append("password")
    return broken


def factory_from_settings(settings: Settings, worker: str = "") -> TestDataFactory:
    """Build a factory seeded from ``STOREFRONT_DATA_SEED`` when it is set.

    ``worker`` salts the seed so parallel workers sharing one seed still issue
    distinct usernames.
    """
    if settings.data_seed is None:
        return TestDataFactory()
    seed: int | str = f"{settings.data_seed}:{worker}" if worker else settings.data_seed
    logger.info("Test data seed: %s", seed)
    return TestDataFactory(seed=seed)
