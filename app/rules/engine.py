# app/rules/engine.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from schemas import CalculationStep, HeirAllocation, HeirType, SurvivorSet
from app.math.shares import (
    FLOAT_EPSILON,
    ONE_EIGHTH,
    ONE_HALF,
    ONE_QUARTER,
    ONE_SIXTH,
    ONE_THIRD,
    capped_share,
    format_amount,
    format_fraction,
    fraction_of,
    group_fixed_fraction,
    percent_of,
    split_two_to_one,
)


# =========================
# Rule outcome (accumulator)
# =========================
@dataclass
class RuleOutcome:
    """
    What one heir class rule resolved: its allocation rows, its trace steps and
    the estate still undistributed once it is done.
    """
    remaining: float
    allocations: List[HeirAllocation] = field(default_factory=list)
    steps: List[CalculationStep] = field(default_factory=list)


Rule = Callable[[SurvivorSet, float, float], Optional[RuleOutcome]]


# =========================
# Helpers
# =========================
def _allocation(heir_type: HeirType, person_count: int, amount: float, estate_value: float,
                share_fraction: str, note: str) -> HeirAllocation:
    return HeirAllocation(
        heir_type=heir_type,
        person_count=person_count,
        share_percent=percent_of(amount, estate_value),
        amount=amount,
        amount_each=amount / person_count,
        share_fraction=share_fraction,
        calculation_note=note,
    )

def _step(label: str, description: str) -> CalculationStep:
    return CalculationStep(label=label, description=description)

def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def _fixed_female_share(heir_type: HeirType, count: int, noun: Tuple[str, str],
                        estate_value: float, remaining: float) -> RuleOutcome:
    """
    Daughters (or sisters) without a male counterpart: 1/2 for one, 2/3 shared by
    two or more, taken from the original estate and capped at what remains.
    """
    fraction = group_fixed_fraction(count)
    amount, capped = capped_share(estate_value, fraction, remaining)
    who = _plural(count, *noun)

    if amount <= FLOAT_EPSILON:
        return RuleOutcome(
            remaining=remaining,
            steps=[_step(heir_type.value, f"Nothing remains of the estate for the {who}.")],
        )

    if count == 1:
        note = f"{format_fraction(fraction)} of estate"
    else:
        note = f"{format_fraction(fraction)} of estate shared by {count}"
    description = (
        f"With no male of the same class the {who} take a fixed {format_fraction(fraction)} "
        f"of the estate: {format_amount(amount)}."
    )
    if capped:
        note += " (capped at remaining estate)"
        description = (
            f"The {who} are due {format_fraction(fraction)} of the estate "
            f"({format_amount(fraction_of(estate_value, fraction))}) but only "
            f"{format_amount(amount)} remains, so the share is capped."
        )
    if count > 1:
        description += f" Each receives {format_amount(amount / count)}."

    return RuleOutcome(
        remaining=remaining - amount,
        allocations=[_allocation(heir_type, count, amount, estate_value, format_fraction(fraction), note)],
        steps=[_step(heir_type.value, description)],
    )


def _residuary_split(male_type: HeirType, female_type: HeirType, males: int, females: int,
                     male_noun: Tuple[str, str], female_noun: Tuple[str, str],
                     estate_value: float, remaining: float, label: str) -> RuleOutcome:
    """
    The whole remaining estate goes to males and females of one class, each male
    taking twice a female's share. Exhausts the remainder.
    """
    pool = max(remaining, 0.0)
    if pool <= FLOAT_EPSILON:
        return RuleOutcome(
            remaining=remaining,
            steps=[_step(label, "Nothing remains of the estate for the residuary heirs.")],
        )

    males_total, females_total = split_two_to_one(pool, males, females)
    total_units = 2 * males + females
    allocations: List[HeirAllocation] = []

    if females:
        male_note = f"Residuary (2x {female_noun[0]} share)"
    else:
        male_note = "Residuary (entire remainder)"
    allocations.append(_allocation(male_type, males, males_total, estate_value, "Residuary", male_note))
    if females:
        allocations.append(_allocation(female_type, females, females_total, estate_value, "Residuary",
                                       f"Residuary (half a {male_noun[0]} share)"))

    if females:
        description = (
            f"The remaining {format_amount(pool)} is divided 2:1 between "
            f"{_plural(males, *male_noun)} and {_plural(females, *female_noun)}: "
            f"{total_units} share units of {format_amount(pool / total_units)}. "
            f"{male_type.value} receive {format_amount(males_total)}, "
            f"{female_type.value} receive {format_amount(females_total)}."
        )
    else:
        description = (
            f"The remaining {format_amount(pool)} goes entirely to the "
            f"{_plural(males, *male_noun)} as residuary heirs"
        )
        description += f", {format_amount(males_total / males)} each." if males > 1 else "."

    return RuleOutcome(
        remaining=remaining - pool,
        allocations=allocations,
        steps=[_step(label, description)],
    )


# =========================
# Rules, in priority order
# =========================
def spouse_rule(survivors: SurvivorSet, estate_value: float, remaining: float) -> Optional[RuleOutcome]:
    if not survivors.has_spouse:
        return None

    if survivors.has_children:
        fraction, reason = ONE_EIGHTH, "the deceased left children"
    else:
        fraction, reason = ONE_QUARTER, "the deceased left no children"
    amount = fraction_of(estate_value, fraction)

    return RuleOutcome(
        remaining=remaining - amount,
        allocations=[_allocation(HeirType.SPOUSE, 1, amount, estate_value,
                                 format_fraction(fraction), f"{format_fraction(fraction)} of estate")],
        steps=[_step("Spouse share",
                     f"Spouse receives {format_fraction(fraction)} of the estate "
                     f"({format_amount(amount)}) because {reason}.")],
    )


def father_rule(survivors: SurvivorSet, estate_value: float, remaining: float) -> Optional[RuleOutcome]:
    """
    Fixed 1/6 beside sons. Without sons the father also takes from the residue:
    whichever is larger of 1/6 of the estate and half of what is left so far.
    """
    if not survivors.has_father:
        return None

    sixth = fraction_of(estate_value, ONE_SIXTH)
    if survivors.son_count > 0:
        amount, share_fraction, note = sixth, "1/6", "1/6 of estate"
        description = (
            f"Father receives a fixed 1/6 of the estate ({format_amount(amount)}) "
            f"because sons are present and take the residue."
        )
    else:
        half_remaining = fraction_of(max(remaining, 0.0), ONE_HALF)
        if half_remaining > sixth:
            amount, share_fraction, note = half_remaining, "Residuary", "1/2 of remaining estate (residuary)"
            description = (
                f"With no sons the father also inherits as a residuary heir. Half of the "
                f"remaining {format_amount(remaining)} ({format_amount(amount)}) exceeds 1/6 "
                f"of the estate ({format_amount(sixth)}), so he receives {format_amount(amount)}."
            )
        else:
            amount, share_fraction, note = sixth, "1/6", "1/6 of estate"
            description = (
                f"With no sons the father takes the greater of 1/6 of the estate and half "
                f"of the remainder; 1/6 ({format_amount(amount)}) is greater."
            )

    return RuleOutcome(
        remaining=remaining - amount,
        allocations=[_allocation(HeirType.FATHER, 1, amount, estate_value, share_fraction, note)],
        steps=[_step("Father share", description)],
    )


def mother_rule(survivors: SurvivorSet, estate_value: float, remaining: float) -> Optional[RuleOutcome]:
    if not survivors.has_mother:
        return None

    if survivors.has_children or survivors.has_siblings:
        fraction = ONE_SIXTH
        if survivors.has_children:
            reason = "the deceased left children"
        else:
            reason = "the deceased left siblings"
    else:
        fraction, reason = ONE_THIRD, "there are no children and no siblings"
    amount = fraction_of(estate_value, fraction)

    return RuleOutcome(
        remaining=remaining - amount,
        allocations=[_allocation(HeirType.MOTHER, 1, amount, estate_value,
                                 format_fraction(fraction), f"{format_fraction(fraction)} of estate")],
        steps=[_step("Mother share",
                     f"Mother receives {format_fraction(fraction)} of the estate "
                     f"({format_amount(amount)}) because {reason}.")],
    )


def paternal_grandfather_rule(survivors: SurvivorSet, estate_value: float,
                              remaining: float) -> Optional[RuleOutcome]:
    if not survivors.has_paternal_grandfather:
        return None

    if survivors.has_father:
        return RuleOutcome(
            remaining=remaining,
            steps=[_step("Paternal grandfather",
                         "Paternal grandfather receives nothing because the father is alive.")],
        )

    amount = fraction_of(estate_value, ONE_SIXTH)
    return RuleOutcome(
        remaining=remaining - amount,
        allocations=[_allocation(HeirType.PATERNAL_GRANDFATHER, 1, amount, estate_value,
                                 "1/6", "1/6 of estate (in place of father)")],
        steps=[_step("Paternal grandfather",
                     f"Paternal grandfather takes the father's place and receives 1/6 of "
                     f"the estate ({format_amount(amount)}).")],
    )


def grandmother_rule(survivors: SurvivorSet, estate_value: float, remaining: float) -> Optional[RuleOutcome]:
    grandmothers = []
    if survivors.has_paternal_grandmother:
        grandmothers.append(HeirType.PATERNAL_GRANDMOTHER)
    if survivors.has_maternal_grandmother:
        grandmothers.append(HeirType.MATERNAL_GRANDMOTHER)
    if not grandmothers:
        return None

    if survivors.has_mother:
        return RuleOutcome(
            remaining=remaining,
            steps=[_step("Grandmothers",
                         "Grandmothers receive nothing because the mother is alive.")],
        )

    each_fraction = ONE_SIXTH / len(grandmothers)
    each = fraction_of(estate_value, each_fraction)
    if len(grandmothers) == 1:
        note = "1/6 of estate (in place of mother)"
        description = (
            f"{grandmothers[0].value} takes the mother's place and receives 1/6 of the "
            f"estate ({format_amount(each)})."
        )
    else:
        note = "1/6 of estate shared between grandmothers"
        description = (
            f"Both grandmothers take the mother's place and share 1/6 of the estate "
            f"equally, {format_amount(each)} each."
        )

    allocations = [
        _allocation(heir_type, 1, each, estate_value, format_fraction(each_fraction), note)
        for heir_type in grandmothers
    ]
    return RuleOutcome(
        remaining=remaining - each * len(grandmothers),
        allocations=allocations,
        steps=[_step("Grandmothers", description)],
    )


def children_rule(survivors: SurvivorSet, estate_value: float, remaining: float) -> Optional[RuleOutcome]:
    if not survivors.has_children:
        return None

    if survivors.son_count == 0:
        return _fixed_female_share(HeirType.DAUGHTERS, survivors.daughter_count,
                                   ("daughter", "daughters"), estate_value, remaining)

    return _residuary_split(
        HeirType.SONS, HeirType.DAUGHTERS,
        survivors.son_count, survivors.daughter_count,
        ("son", "sons"), ("daughter", "daughters"),
        estate_value, remaining, "Children (residuary)",
    )


def sibling_rule(survivors: SurvivorSet, estate_value: float, remaining: float) -> Optional[RuleOutcome]:
    """
    Siblings inherit only without children and without a father. Full siblings
    shut out paternal (half) siblings completely.
    """
    if not survivors.has_siblings:
        return None

    if survivors.has_children or survivors.has_father:
        blocker = "children" if survivors.has_children else "the father"
        return RuleOutcome(
            remaining=remaining,
            steps=[_step("Siblings", f"Siblings receive nothing because {blocker} survive the deceased.")],
        )

    if remaining <= FLOAT_EPSILON:
        return RuleOutcome(
            remaining=remaining,
            steps=[_step("Siblings", "Siblings receive nothing because the estate is already exhausted.")],
        )

    steps: List[CalculationStep] = []
    if survivors.has_full_siblings:
        brothers, sisters = survivors.full_brother_count, survivors.full_sister_count
        brother_type, sister_type = HeirType.FULL_BROTHERS, HeirType.FULL_SISTERS
        brother_noun, sister_noun = ("full brother", "full brothers"), ("full sister", "full sisters")
        excluded = survivors.paternal_brother_count + survivors.paternal_sister_count
        if excluded:
            steps.append(_step("Paternal siblings",
                               f"{_plural(excluded, 'paternal sibling', 'paternal siblings')} "
                               f"receive nothing because full siblings are present."))
    else:
        brothers, sisters = survivors.paternal_brother_count, survivors.paternal_sister_count
        brother_type, sister_type = HeirType.PATERNAL_BROTHERS, HeirType.PATERNAL_SISTERS
        brother_noun, sister_noun = ("paternal brother", "paternal brothers"), ("paternal sister", "paternal sisters")

    if brothers == 0:
        outcome = _fixed_female_share(sister_type, sisters, sister_noun, estate_value, remaining)
    else:
        outcome = _residuary_split(brother_type, sister_type, brothers, sisters,
                                   brother_noun, sister_noun, estate_value, remaining,
                                   "Siblings (residuary)")
    outcome.steps = steps + outcome.steps
    return outcome


RULES: Tuple[Rule, ...] = (
    spouse_rule,
    father_rule,
    mother_rule,
    paternal_grandfather_rule,
    grandmother_rule,
    children_rule,
    sibling_rule,
)
