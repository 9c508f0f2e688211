"""Resolve free-text addresses to supported country codes."""

from __future__ import annotations

from functools import lru_cache

from freightcheck.compliance.regulations import CountryRegulationRegistry, get_regulation_registry

# Scanned in order after the registry codes and names; first hit wins.
COUNTRY_ALIASES: tuple[tuple[str, str], ...] = (
    ("UNITED STATES", "US"), ("USA", "US"), ("AMERICA", "US"),
    ("UNITED KINGDOM", "UK"), ("BRITAIN", "UK"), ("ENGLAND", "UK"),
    ("GERMANY", "DE"), ("DEUTSCHLAND", "DE"),
    ("FRANCE", "FR"),
    ("ITALY", "IT"), ("ITALIA", "IT"),
    ("SPAIN", "ES"), ("ESPANA", "ES"),
    ("NETHERLANDS", "NL"), ("HOLLAND", "NL"),
    ("BELGIUM", "BE"), ("BELGIË", "BE"),
    ("CHINA", "CN"), ("PRC", "CN"),
    ("JAPAN", "JP"),
    ("SOUTH KOREA", "KR"), ("KOREA", "KR"),
    ("INDIA", "IN"),
    ("AUSTRALIA", "AU"),
    ("CANADA", "CA"),
    ("MEXICO", "MX"),
    ("BRAZIL", "BR"), ("BRASIL", "BR"),
    ("UAE", "AE"), ("UNITED ARAB EMIRATES", "AE"),
    ("SAUDI ARABIA", "SA"), ("KSA", "SA"),
    ("SINGAPORE", "SG"),
    ("HONG KONG", "HK"),
    ("MALAYSIA", "MY"),
    ("THAILAND", "TH"),
    ("VIETNAM", "VN"),
    ("INDONESIA", "ID"),
    ("PHILIPPINES", "PH"),
    ("SOUTH AFRICA", "ZA"),
    ("EGYPT", "EG"),
    ("TURKEY", "TR"),
    ("RUSSIA", "RU"),
)


class CountryResolver:
    """Substring-based country detection over the regulation registry.

    Matching is deliberately plain: the upper-cased address is tested for each
    registry code and name in registry order, then for each alias. Short codes
    can match inside longer words ("AUSTRALIA" contains "US"); registry order
    decides such collisions.
    """

    def __init__(
        self,
        registry: CountryRegulationRegistry | None = None,
        aliases: tuple[tuple[str, str], ...] = COUNTRY_ALIASES,
    ) -> None:
        self._registry = registry if registry is not None else get_regulation_registry()
        self._aliases = tuple((alias.upper(), code) for alias, code in aliases)

    @property
    def registry(self) -> CountryRegulationRegistry:
        return self._registry

    def resolve(self, address: str | None) -> str | None:
        if not address:
            return None
        upper_address = address.upper()

        for regulation in self._registry:
            if regulation.code in upper_address or regulation.name.upper() in upper_address:
                return regulation.code

        for alias, code in self._aliases:
            if alias in upper_address:
                return code
        return None


@lru_cache(maxsize=1)
def get_country_resolver() -> CountryResolver:
    return CountryResolver()


def resolve_country(address: str | None) -> str | None:
    """Resolve ``address`` with the default registry; ``None`` when unknown."""
    return get_country_resolver().resolve(address)
