"""Insert random calculations grouped into sessions for local testing."""

from __future__ import annotations

import argparse
import random
import uuid
from decimal import ROUND_DOWN, Decimal

from nic_calculator.calculations.calculation_models import CalculationRequest
from nic_calculator.calculations.calculation_repository import CalculationRepository
from nic_calculator.calculations.calculation_service import CalculationService
from nic_calculator.config import load_config
from nic_calculator.security.session_hasher import SessionHasher

_CENTS = Decimal("0.01")


def random_request(rng: random.Random) -> CalculationRequest:
    annual_salary = Decimal(str(rng.uniform(5_000, 300_000))).quantize(_CENTS)
    year1 = Decimal(str(rng.uniform(100, 1_000))).quantize(_CENTS)
    year2 = (year1 * Decimal("0.9")).quantize(_CENTS)
    saving = year1 - year2
    return CalculationRequest(
        annual_salary=annual_salary,
        year1_estimated_nic=year1,
        year2_estimated_nic=year2,
        rounded_saving=saving.to_integral_value(rounding=ROUND_DOWN),
        saving=saving,
    )


def seed(service: CalculationService, number: int, rng: random.Random) -> int:
    """Save ``number`` calculations spread over sessions of 1-4 calculations."""
    saved = 0
    while saved < number:
        session_id = str(uuid.uuid4())
        per_session = min(rng.randint(1, 4), number - saved)
        for _ in range(per_session):
            service.save(session_id, random_request(rng))
        saved += per_session
    return saved


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--count", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    config = load_config()
    service = CalculationService(
        repository=CalculationRepository(config.session_factory),
        hasher=SessionHasher.from_base64(config.crypto_key),
    )
    saved = seed(service, args.count, random.Random(args.seed))
    print(f"Inserted {saved} calculations.")


if __name__ == "__main__":
    main()
