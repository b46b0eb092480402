# calculator.py

from __future__ import annotations

import logging
import math
from typing import List, Sequence, Union

import schemas
from app.math.shares import format_amount, is_effectively_zero, strip_thousands_separators
from app.rules.engine import RULES, Rule

logger = logging.getLogger(__name__)


class InvalidEstateValue(ValueError):
    """Estate value missing, not a number, or not strictly positive."""


# --------------------------
# Precondition
# --------------------------
def _parse_estate_value(estate_value: Union[float, int, str, None]) -> float:
    if estate_value is None or isinstance(estate_value, bool):
        raise InvalidEstateValue(f"Estate value must be a positive number, got {estate_value!r}")
    if isinstance(estate_value, str):
        try:
            value = float(strip_thousands_separators(estate_value))
        except ValueError as exc:
            raise InvalidEstateValue(f"Estate value is not a number: {estate_value!r}") from exc
    else:
        try:
            value = float(estate_value)
        except (TypeError, ValueError) as exc:
            raise InvalidEstateValue(f"Estate value is not a number: {estate_value!r}") from exc

    if not math.isfinite(value):
        raise InvalidEstateValue(f"Estate value must be a finite number, got {estate_value!r}")
    if value <= 0:
        raise InvalidEstateValue(f"Estate value must be greater than zero, got {estate_value!r}")
    return value


def _no_eligible_heirs(estate_value: float) -> schemas.NoEligibleHeirs:
    return schemas.NoEligibleHeirs(
        estate_value=estate_value,
        baitul_mal_amount=estate_value,
        steps=[schemas.CalculationStep(
            label="No eligible heirs",
            description=(
                f"No surviving relatives were provided, so the entire estate of "
                f"{format_amount(estate_value)} passes to the public treasury (Baitul Mal)."
            ),
        )],
    )


# ============================================================
#                    MAIN ENTRY POINT
# ============================================================
def compute_distribution(estate_value: Union[float, int, str],
                         survivors: schemas.SurvivorSet,
                         rules: Sequence[Rule] = RULES) -> schemas.DistributionResult:
    """
    Divide an estate among the surviving relatives.

    Rules run in fixed priority order (spouse, father, mother, grandparents,
    children, siblings). Each receives the estate still undistributed after the
    ones before it and hands back the new remainder. Whatever is left at the end
    is reported as an extra step, not handed to anyone.

    Raises InvalidEstateValue when estate_value is not a positive number.
    """
    estate = _parse_estate_value(estate_value)

    # 0) Nobody survives
    if survivors.is_empty:
        logger.debug("No eligible heirs for estate %s; attributed to Baitul Mal", estate)
        return _no_eligible_heirs(estate)

    allocations: List[schemas.HeirAllocation] = []
    steps: List[schemas.CalculationStep] = []
    remaining = estate

    # 1-6) Fold the rules over the running remainder
    for rule in rules:
        outcome = rule(survivors, estate, remaining)
        if outcome is None:
            continue
        allocations.extend(outcome.allocations)
        steps.extend(outcome.steps)
        remaining = outcome.remaining

    # 7) Leftover is disclosed, never redistributed
    undistributed = 0.0
    if not is_effectively_zero(remaining):
        undistributed = remaining
        steps.append(schemas.CalculationStep(
            label="Undistributed remainder",
            description=(
                f"{format_amount(remaining)} of the estate was not claimed by any share above. "
                f"It should fall to further residuary heirs or to Baitul Mal."
            ),
        ))
        logger.info("Estate %s left %s undistributed", estate, remaining)

    total_distributed = sum(a.amount for a in allocations)
    logger.debug(
        "Distributed %s across %d heir categories in %d steps",
        total_distributed, len(allocations), len(steps),
    )
    return schemas.Distributed(
        estate_value=estate,
        allocations=allocations,
        steps=steps,
        total_distributed=total_distributed,
        undistributed_amount=undistributed,
    )
