"""Account - canonical identity key used for every grant lookup."""

from dataclasses import dataclass

from accessgate.domain.exceptions import InvalidIdentity

DOMAIN_SEPARATOR = "\\"


@dataclass(frozen=True)
class Account:
    """Normalized account key (domain prefix stripped, lower-cased)."""

    key: str

    @classmethod
    def parse(cls, raw: str | None) -> "Account":
        """Resolve a raw identity (DOMAIN\\user or bare user) into an Account."""
        if raw is None or not raw.strip():
            raise InvalidIdentity("Identity is empty")

        value = raw.strip()
        if DOMAIN_SEPARATOR in value:
            _, _, value = value.partition(DOMAIN_SEPARATOR)
            value = value.strip()
        if not value:
            raise InvalidIdentity(f"Identity has no username: {raw!r}")

        return cls(key=value.lower())

    def __str__(self) -> str:
        return self.key
