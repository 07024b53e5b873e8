"""Currency -- ISO 4217 metadata provider with cash rounding rules.

Fractional digits follow ISO 4217. Cash fractional digits and cash rounding
increments follow the CLDR currency data, where a currency's smallest
circulating unit differs from its accounting precision.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from money_kernel.exceptions import UnknownCurrencyError

_ZERO = Decimal("0")


@dataclass(frozen=True)
class CurrencyInfo:
    """
    Rounding metadata for a single currency.

    Contract:
        ``rounding_increment`` and ``cash_rounding_increment`` are expressed in
        major units (``Decimal("0.05")`` is nickel rounding). Zero means the
        currency has no increment beyond its fractional digits.
    """

    code: str
    name: str
    fractional_digits: int
    cash_fractional_digits: int | None = None
    rounding_increment: Decimal = _ZERO
    cash_rounding_increment: Decimal = _ZERO

    def __post_init__(self) -> None:
        code = self.code.upper().strip() if isinstance(self.code, str) else ""
        if not code:
            raise ValueError(f"Currency code is required: {self.code!r}")
        object.__setattr__(self, "code", code)

        if not isinstance(self.fractional_digits, int) or self.fractional_digits < 0:
            raise ValueError(
                f"fractional_digits must be a non-negative int, got {self.fractional_digits!r}"
            )
        if self.cash_fractional_digits is None:
            object.__setattr__(self, "cash_fractional_digits", self.fractional_digits)
        elif self.cash_fractional_digits < 0:
            raise ValueError(
                f"cash_fractional_digits must be non-negative, got {self.cash_fractional_digits!r}"
            )

        for attr in ("rounding_increment", "cash_rounding_increment"):
            value = getattr(self, attr)
            if not isinstance(value, Decimal):
                try:
                    value = Decimal(str(value))
                except (InvalidOperation, ValueError) as e:
                    raise ValueError(f"Invalid {attr}: {value!r}") from e
                object.__setattr__(self, attr, value)
            if not value.is_finite() or value < _ZERO:
                raise ValueError(f"{attr} must be a non-negative number, got {value}")

    def digits_for(self, cash: bool = False) -> int:
        """Fractional digits for accounting or cash amounts."""
        return self.cash_fractional_digits if cash else self.fractional_digits

    def increment_for(self, cash: bool = False) -> Decimal:
        """Rounding increment for accounting or cash amounts (0 = none)."""
        return self.cash_rounding_increment if cash else self.rounding_increment

    def quantum_for(self, cash: bool = False) -> Decimal:
        """Exponent template for Decimal.quantize(), e.g. Decimal('0.01')."""
        return Decimal(1).scaleb(-self.digits_for(cash))

    def minimum_unit(self, cash: bool = False) -> Decimal:
        """Smallest representable amount: the increment, else one minor unit."""
        increment = self.increment_for(cash)
        return increment if increment > _ZERO else self.quantum_for(cash)


@runtime_checkable
class CurrencyMetadataProvider(Protocol):
    """Lookup interface for currency rounding metadata."""

    def lookup(self, code: str) -> CurrencyInfo | None:
        """Return metadata for ``code`` or None when the code is unknown."""
        ...


def normalize_code(code: object) -> str:
    """Canonical form of a currency code: stripped and upper-case."""
    if isinstance(code, CurrencyInfo):
        return code.code
    if not isinstance(code, str):
        raise UnknownCurrencyError(code)
    return code.upper().strip()


class CurrencyRegistry:
    """
    Immutable currency table implementing ``CurrencyMetadataProvider``.

    Contract:
        Registries never change after construction. ``extended()`` returns a
        new registry, so a registry may be shared freely between threads and
        injected into operations as a capability.
    """

    def __init__(self, currencies: Mapping[str, CurrencyInfo] | Iterable[CurrencyInfo]):
        if isinstance(currencies, Mapping):
            infos = list(currencies.values())
        else:
            infos = list(currencies)
        self._currencies: Mapping[str, CurrencyInfo] = MappingProxyType(
            {info.code: info for info in infos}
        )

    @classmethod
    def iso4217(cls) -> CurrencyRegistry:
        """The bundled ISO 4217 table."""
        return _ISO_4217_REGISTRY

    def extended(self, *infos: CurrencyInfo) -> CurrencyRegistry:
        """Return a new registry with ``infos`` added (replacing same codes)."""
        merged = dict(self._currencies)
        for info in infos:
            merged[info.code] = info
        return CurrencyRegistry(merged)

    def lookup(self, code: str) -> CurrencyInfo | None:
        """Get currency information by code."""
        if not code or not isinstance(code, str):
            return None
        return self._currencies.get(code.upper().strip())

    def is_valid(self, code: str) -> bool:
        """Check if a currency code is known."""
        return self.lookup(code) is not None

    def validate(self, code: object) -> str:
        """Validate and normalize a currency code.

        Raises:
            UnknownCurrencyError: If the code is not in this registry.
        """
        normalized = normalize_code(code)
        if normalized not in self._currencies:
            raise UnknownCurrencyError(code)
        return normalized

    def all_codes(self) -> frozenset[str]:
        """Get all valid currency codes."""
        return frozenset(self._currencies.keys())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.is_valid(code)

    def __len__(self) -> int:
        return len(self._currencies)

    def __repr__(self) -> str:
        return f"CurrencyRegistry({len(self._currencies)} currencies)"


def _info(
    code: str,
    digits: int,
    name: str,
    cash_digits: int | None = None,
    cash_increment: str = "0",
) -> CurrencyInfo:
    return CurrencyInfo(
        code=code,
        name=name,
        fractional_digits=digits,
        cash_fractional_digits=cash_digits,
        cash_rounding_increment=Decimal(cash_increment),
    )


# ISO 4217 currencies with their decimal places
# Source: https://www.iso.org/iso-4217-currency-codes.html
# Cash rules: CLDR supplemental currencyData
_ISO_4217: tuple[CurrencyInfo, ...] = (
    # Major currencies
    _info("USD", 2, "US Dollar"),
    _info("EUR", 2, "Euro"),
    _info("GBP", 2, "Pound Sterling"),
    _info("JPY", 0, "Japanese Yen"),
    _info("CHF", 2, "Swiss Franc", cash_increment="0.05"),
    _info("CAD", 2, "Canadian Dollar", cash_increment="0.05"),
    _info("AUD", 2, "Australian Dollar", cash_increment="0.05"),
    _info("NZD", 2, "New Zealand Dollar"),
    # Cash rounding differs from accounting precision
    _info("DKK", 2, "Danish Krone", cash_increment="0.50"),
    _info("SEK", 2, "Swedish Krona", cash_digits=0),
    _info("NOK", 2, "Norwegian Krone", cash_digits=0),
    _info("CZK", 2, "Czech Koruna", cash_digits=0),
    _info("HUF", 2, "Hungarian Forint", cash_digits=0),
    _info("AMD", 2, "Armenian Dram", cash_digits=0),
    _info("COP", 2, "Colombian Peso", cash_digits=0),
    _info("CRC", 2, "Costa Rican Colon", cash_digits=0),
    _info("GYD", 2, "Guyanese Dollar", cash_digits=0),
    _info("IDR", 2, "Indonesian Rupiah", cash_digits=0),
    _info("MNT", 2, "Mongolian Tugrik", cash_digits=0),
    _info("MUR", 2, "Mauritian Rupee", cash_digits=0),
    _info("PKR", 2, "Pakistani Rupee", cash_digits=0),
    _info("TWD", 2, "New Taiwan Dollar", cash_digits=0),
    _info("TZS", 2, "Tanzanian Shilling", cash_digits=0),
    _info("UZS", 2, "Uzbekistani Som", cash_digits=0),
    # Zero decimal currencies
    _info("BIF", 0, "Burundian Franc"),
    _info("CLP", 0, "Chilean Peso"),
    _info("DJF", 0, "Djiboutian Franc"),
    _info("GNF", 0, "Guinean Franc"),
    _info("ISK", 0, "Icelandic Krona"),
    _info("KMF", 0, "Comorian Franc"),
    _info("KRW", 0, "South Korean Won"),
    _info("PYG", 0, "Paraguayan Guarani"),
    _info("RWF", 0, "Rwandan Franc"),
    _info("UGX", 0, "Ugandan Shilling"),
    _info("UYI", 0, "Uruguay Peso en Unidades Indexadas"),
    _info("VND", 0, "Vietnamese Dong"),
    _info("VUV", 0, "Vanuatu Vatu"),
    _info("XAF", 0, "Central African CFA Franc"),
    _info("XOF", 0, "West African CFA Franc"),
    _info("XPF", 0, "CFP Franc"),
    # Three decimal currencies
    _info("BHD", 3, "Bahraini Dinar"),
    _info("IQD", 3, "Iraqi Dinar"),
    _info("JOD", 3, "Jordanian Dinar"),
    _info("KWD", 3, "Kuwaiti Dinar"),
    _info("LYD", 3, "Libyan Dinar"),
    _info("OMR", 3, "Omani Rial"),
    _info("TND", 3, "Tunisian Dinar"),
    # Four decimal currencies
    _info("CLF", 4, "Chilean Unidad de Fomento"),
    _info("UYW", 4, "Unidad Previsional"),
    # Standard two decimal currencies
    _info("AED", 2, "UAE Dirham"),
    _info("AFN", 2, "Afghan Afghani"),
    _info("ALL", 2, "Albanian Lek"),
    _info("ANG", 2, "Netherlands Antillean Guilder"),
    _info("AOA", 2, "Angolan Kwanza"),
    _info("ARS", 2, "Argentine Peso"),
    _info("AWG", 2, "Aruban Florin"),
    _info("AZN", 2, "Azerbaijan Manat"),
    _info("BAM", 2, "Bosnia and Herzegovina Convertible Mark"),
    _info("BBD", 2, "Barbadian Dollar"),
    _info("BDT", 2, "Bangladeshi Taka"),
    _info("BGN", 2, "Bulgarian Lev"),
    _info("BMD", 2, "Bermudian Dollar"),
    _info("BND", 2, "Brunei Dollar"),
    _info("BOB", 2, "Bolivian Boliviano"),
    _info("BOV", 2, "Bolivian Mvdol"),
    _info("BRL", 2, "Brazilian Real"),
    _info("BSD", 2, "Bahamian Dollar"),
    _info("BTN", 2, "Bhutanese Ngultrum"),
    _info("BWP", 2, "Botswana Pula"),
    _info("BYN", 2, "Belarusian Ruble"),
    _info("BZD", 2, "Belize Dollar"),
    _info("CDF", 2, "Congolese Franc"),
    _info("CHE", 2, "WIR Euro"),
    _info("CHW", 2, "WIR Franc"),
    _info("CNY", 2, "Chinese Yuan"),
    _info("COU", 2, "Colombian Unidad de Valor Real"),
    _info("CUC", 2, "Cuban Convertible Peso"),
    _info("CUP", 2, "Cuban Peso"),
    _info("CVE", 2, "Cape Verdean Escudo"),
    _info("DOP", 2, "Dominican Peso"),
    _info("DZD", 2, "Algerian Dinar"),
    _info("EGP", 2, "Egyptian Pound"),
    _info("ERN", 2, "Eritrean Nakfa"),
    _info("ETB", 2, "Ethiopian Birr"),
    _info("FJD", 2, "Fijian Dollar"),
    _info("FKP", 2, "Falkland Islands Pound"),
    _info("GEL", 2, "Georgian Lari"),
    _info("GHS", 2, "Ghanaian Cedi"),
    _info("GIP", 2, "Gibraltar Pound"),
    _info("GMD", 2, "Gambian Dalasi"),
    _info("GTQ", 2, "Guatemalan Quetzal"),
    _info("HKD", 2, "Hong Kong Dollar"),
    _info("HNL", 2, "Honduran Lempira"),
    _info("HTG", 2, "Haitian Gourde"),
    _info("ILS", 2, "Israeli New Shekel"),
    _info("INR", 2, "Indian Rupee"),
    _info("IRR", 2, "Iranian Rial"),
    _info("JMD", 2, "Jamaican Dollar"),
    _info("KES", 2, "Kenyan Shilling"),
    _info("KGS", 2, "Kyrgyzstani Som"),
    _info("KHR", 2, "Cambodian Riel"),
    _info("KPW", 2, "North Korean Won"),
    _info("KYD", 2, "Cayman Islands Dollar"),
    _info("KZT", 2, "Kazakhstani Tenge"),
    _info("LAK", 2, "Lao Kip"),
    _info("LBP", 2, "Lebanese Pound"),
    _info("LKR", 2, "Sri Lankan Rupee"),
    _info("LRD", 2, "Liberian Dollar"),
    _info("LSL", 2, "Lesotho Loti"),
    _info("MAD", 2, "Moroccan Dirham"),
    _info("MDL", 2, "Moldovan Leu"),
    _info("MGA", 2, "Malagasy Ariary"),
    _info("MKD", 2, "Macedonian Denar"),
    _info("MMK", 2, "Myanmar Kyat"),
    _info("MOP", 2, "Macanese Pataca"),
    _info("MRU", 2, "Mauritanian Ouguiya"),
    _info("MVR", 2, "Maldivian Rufiyaa"),
    _info("MWK", 2, "Malawian Kwacha"),
    _info("MXN", 2, "Mexican Peso"),
    _info("MXV", 2, "Mexican Unidad de Inversion"),
    _info("MYR", 2, "Malaysian Ringgit"),
    _info("MZN", 2, "Mozambican Metical"),
    _info("NAD", 2, "Namibian Dollar"),
    _info("NGN", 2, "Nigerian Naira"),
    _info("NIO", 2, "Nicaraguan Cordoba"),
    _info("NPR", 2, "Nepalese Rupee"),
    _info("PAB", 2, "Panamanian Balboa"),
    _info("PEN", 2, "Peruvian Sol"),
    _info("PGK", 2, "Papua New Guinean Kina"),
    _info("PHP", 2, "Philippine Peso"),
    _info("PLN", 2, "Polish Zloty"),
    _info("QAR", 2, "Qatari Riyal"),
    _info("RON", 2, "Romanian Leu"),
    _info("RSD", 2, "Serbian Dinar"),
    _info("RUB", 2, "Russian Ruble"),
    _info("SAR", 2, "Saudi Riyal"),
    _info("SBD", 2, "Solomon Islands Dollar"),
    _info("SCR", 2, "Seychellois Rupee"),
    _info("SDG", 2, "Sudanese Pound"),
    _info("SGD", 2, "Singapore Dollar"),
    _info("SHP", 2, "Saint Helena Pound"),
    _info("SLE", 2, "Sierra Leonean Leone"),
    _info("SOS", 2, "Somali Shilling"),
    _info("SRD", 2, "Surinamese Dollar"),
    _info("SSP", 2, "South Sudanese Pound"),
    _info("STN", 2, "Sao Tome and Principe Dobra"),
    _info("SVC", 2, "Salvadoran Colon"),
    _info("SYP", 2, "Syrian Pound"),
    _info("SZL", 2, "Swazi Lilangeni"),
    _info("THB", 2, "Thai Baht"),
    _info("TJS", 2, "Tajikistani Somoni"),
    _info("TMT", 2, "Turkmenistan Manat"),
    _info("TOP", 2, "Tongan Paanga"),
    _info("TRY", 2, "Turkish Lira"),
    _info("TTD", 2, "Trinidad and Tobago Dollar"),
    _info("UAH", 2, "Ukrainian Hryvnia"),
    _info("USN", 2, "US Dollar (Next day)"),
    _info("UYU", 2, "Uruguayan Peso"),
    _info("VED", 2, "Venezuelan Bolivar Digital"),
    _info("VES", 2, "Venezuelan Bolivar Soberano"),
    _info("WST", 2, "Samoan Tala"),
    _info("XCD", 2, "East Caribbean Dollar"),
    _info("YER", 2, "Yemeni Rial"),
    _info("ZAR", 2, "South African Rand"),
    _info("ZMW", 2, "Zambian Kwacha"),
    _info("ZWL", 2, "Zimbabwean Dollar"),
    # Precious metals and special codes
    _info("XAG", 0, "Silver (troy ounce)"),
    _info("XAU", 0, "Gold (troy ounce)"),
    _info("XBA", 0, "European Composite Unit"),
    _info("XBB", 0, "European Monetary Unit"),
    _info("XBC", 0, "European Unit of Account 9"),
    _info("XBD", 0, "European Unit of Account 17"),
    _info("XDR", 0, "Special Drawing Rights"),
    _info("XPD", 0, "Palladium (troy ounce)"),
    _info("XPT", 0, "Platinum (troy ounce)"),
    _info("XSU", 0, "Sucre"),
    _info("XTS", 0, "Testing Code"),
    _info("XUA", 0, "ADB Unit of Account"),
    _info("XXX", 0, "No currency"),
)

_ISO_4217_REGISTRY = CurrencyRegistry(_ISO_4217)
