import logging
import math
import numbers

from models import NOT_COMPUTABLE, RecipeMetrics, is_computable
from units import l_to_gal

logger = logging.getLogger(__name__)

ABV_FACTOR = 131.25

def _positive(value):
    return isinstance(value, numbers.Real) and value > 0

def _finite(value):
    return isinstance(value, numbers.Real) and math.isfinite(value)

def tinseth_utilization(boil_gravity, time):
    if not _positive(time) or not _finite(boil_gravity):
        return 0
    bigness = 1.65 * (0.000125 ** (boil_gravity - 1))
    boil_time = (1 - math.exp(-0.04 * time)) / 4.15
    return bigness * boil_time

def estimate_original_gravity(final_volume, efficiency, fermentables):
    if not _positive(final_volume) or not _positive(efficiency):
        return NOT_COMPUTABLE
    gallons = l_to_gal(final_volume)
    points = sum(f.extract_points() for f in fermentables) * efficiency / gallons
    og = 1 + (points / 1000)
    return og if math.isfinite(og) else NOT_COMPUTABLE

def estimate_boil_gravity(og, final_volume, preboil_volume):
    if not _finite(og):
        return NOT_COMPUTABLE
    # Pre-boil volume not tracked: use OG as is.
    if not _positive(preboil_volume) or not _positive(final_volume):
        return og
    return 1 + (og - 1) * (final_volume / preboil_volume)

def estimate_bitterness(final_volume, boil_gravity, hops):
    if not _positive(final_volume) or not _finite(boil_gravity):
        return NOT_COMPUTABLE
    total_ibu = 0
    for hop in hops:
        utilization = tinseth_utilization(boil_gravity, hop.time)
        total_ibu += hop.ibu_contribution(final_volume, utilization)
    return total_ibu

def estimate_final_gravity(og, attenuation):
    if not _finite(og) or not _positive(attenuation):
        return NOT_COMPUTABLE
    return 1 + (og - 1) * (1 - attenuation)

def estimate_abv(og, fg):
    if not _finite(og) or not _finite(fg):
        return NOT_COMPUTABLE
    return (og - fg) * ABV_FACTOR

def calculate(recipe):
    # IBU does not depend on FG or ABV
    og = estimate_original_gravity(recipe.final_volume, recipe.efficiency, recipe.fermentables)
    boil_gravity = estimate_boil_gravity(og, recipe.final_volume, recipe.preboil_volume)
    ibu = estimate_bitterness(recipe.final_volume, boil_gravity, recipe.hops)
    fg = estimate_final_gravity(og, recipe.attenuation)
    abv = estimate_abv(og, fg)

    metrics = RecipeMetrics(og, boil_gravity, ibu, fg, abv)
    if not is_computable(og):
        logger.debug('OG not computable (final_volume=%r, efficiency=%r)',
                      recipe.final_volume, recipe.efficiency)
    logger.debug('Calculated %r from %d fermentables and %d hops',
                 metrics, len(recipe.fermentables), len(recipe.hops))
    return metrics
