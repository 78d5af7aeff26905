"""Domain constants and enumerations.

Currencies and jurisdictions form closed sets; rate tables are keyed by
`Currency` members rather than free-form strings.
"""

from enum import Enum


class Currency(str, Enum):
    SGD = "SGD"
    AED = "AED"
    EUR = "EUR"


class JurisdictionCode(str, Enum):
    SG = "SG"
    AE = "AE"
    EU = "EU"


DEFAULT_HOME_CURRENCY = "IDR"
