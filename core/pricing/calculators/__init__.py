from core.pricing.calculators.carpet import calculate_carpet_quote
from core.pricing.calculators.electrostatic_spray import calculate_electrostatic_spray_quote
from core.pricing.calculators.foaming_drain import calculate_foaming_drain_quote
from core.pricing.calculators.grease_trap import calculate_grease_trap_quote
from core.pricing.calculators.microfiber_mopping import calculate_microfiber_mopping_quote
from core.pricing.calculators.pure_janitorial import calculate_pure_janitorial_quote
from core.pricing.calculators.refresh_power_scrub import calculate_refresh_power_scrub_quote
from core.pricing.calculators.rpm_windows import calculate_rpm_windows_quote
from core.pricing.calculators.saniclean import calculate_saniclean_quote
from core.pricing.calculators.sanipod import calculate_sanipod_quote
from core.pricing.calculators.saniscrub import calculate_saniscrub_quote
from core.pricing.calculators.strip_wax import calculate_strip_wax_quote

__all__ = [
    "calculate_carpet_quote",
    "calculate_electrostatic_spray_quote",
    "calculate_foaming_drain_quote",
    "calculate_grease_trap_quote",
    "calculate_microfiber_mopping_quote",
    "calculate_pure_janitorial_quote",
    "calculate_refresh_power_scrub_quote",
    "calculate_rpm_windows_quote",
    "calculate_saniclean_quote",
    "calculate_sanipod_quote",
    "calculate_saniscrub_quote",
    "calculate_strip_wax_quote",
]
