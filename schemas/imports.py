from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator


class Frequency(str, Enum):
    ONE_TIME = "oneTime"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    TWICE_PER_MONTH = "twicePerMonth"
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"
    QUARTERLY = "quarterly"
    BIANNUAL = "biannual"
    ANNUAL = "annual"


class ServiceId(str, Enum):
    SANI_SCRUB = "saniscrub"
    SANI_CLEAN = "saniclean"
    SANI_POD = "sanipod"
    GREASE_TRAP = "greaseTrap"
    PURE_JANITORIAL = "pureJanitorial"
    MICROFIBER_MOPPING = "microfiberMopping"
    RPM_WINDOWS = "rpmWindows"
    CARPET_CLEANING = "carpetCleaning"
    FOAMING_DRAIN = "foamingDrain"
    STRIP_WAX = "stripWax"
    ELECTROSTATIC_SPRAY = "electrostaticSpray"
    REFRESH_POWER_SCRUB = "refreshPowerScrub"


class Location(str, Enum):
    INSIDE_BELTWAY = "insideBeltway"
    OUTSIDE_BELTWAY = "outsideBeltway"


class RateCategory(str, Enum):
    RED = "redRate"
    GREEN = "greenRate"


class JanitorialServiceType(str, Enum):
    RECURRING = "recurringService"
    ONE_TIME = "oneTimeService"


class StripWaxVariant(str, Enum):
    STANDARD_FULL = "standardFull"
    NO_SEALANT = "noSealant"
    WELL_MAINTAINED = "wellMaintained"


class SprayPricingMethod(str, Enum):
    BY_ROOM = "byRoom"
    BY_SQFT = "bySqFt"


class RefreshPricingMethod(str, Enum):
    AREA_SPECIFIC = "areaSpecific"
    HOURLY = "hourly"
    SQUARE_FOOTAGE = "squareFootage"


class KitchenSize(str, Enum):
    SMALL_MEDIUM = "smallMedium"
    LARGE = "large"


class PatioMode(str, Enum):
    STANDALONE = "standalone"
    UPSELL = "upsell"


class ConfigSource(str, Enum):
    DEFAULT = "default"
    REMOTE = "remote"
    PARTIAL = "partial"


def coerce_non_negative(value: Any) -> float:
    """Parse a user-entered number; anything unusable becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def coerce_count(value: Any) -> int:
    return int(math.floor(coerce_non_negative(value)))


def coerce_optional_amount(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return coerce_non_negative(value)


Quantity = Annotated[float, BeforeValidator(coerce_non_negative)]
Count = Annotated[int, BeforeValidator(coerce_count)]
OptionalAmount = Annotated[float | None, BeforeValidator(coerce_optional_amount)]
