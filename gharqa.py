# gharqa.py

import logging
from typing import List

from schemas import GharqaInput, GharqaResult
from calculator import InvalidEstateValue, compute_distribution

logger = logging.getLogger(__name__)


def solve_gharqa(gharqa_input: GharqaInput) -> List[GharqaResult]:
    """
    Relatives who died together in one event (al-Gharqa) do not inherit from
    each other, so every estate in the batch is divided on its own.
    """
    results = []
    for problem in gharqa_input.problems:
        try:
            result = compute_distribution(problem.estate_value, problem.survivors)
        except InvalidEstateValue as exc:
            raise InvalidEstateValue(f"{problem.problem_name}: {exc}") from exc
        results.append(GharqaResult(problem_name=problem.problem_name, result=result))

    logger.debug("Solved %d simultaneous-death estates", len(results))
    return results
