"""Fare-class earning rule: fixed earnings per fare class, any distance."""

from collections.abc import Mapping
from typing import Union

from qcalc.exceptions import ConfigurationError
from qcalc.models import CalculationResult, FareClassEarning, Segment
from qcalc.rules.base import RuleKind, build_result, register_rule


@register_rule
class FareClassRule:
    """Static earnings keyed by fare earn category. The segment is ignored."""

    kind = RuleKind.FARE_CLASS

    def __init__(
        self,
        name: str,
        rule_url: str,
        fare_class_earnings: Mapping[str, Union[FareClassEarning, dict]],
    ) -> None:
        self.name = name
        self.rule_url = rule_url
        self.fare_class_earnings: dict[str, FareClassEarning] = {
            category: FareClassEarning.model_validate(earning)
            for category, earning in fare_class_earnings.items()
        }

    def applies(self, segment: Segment, fare_earn_category: str) -> bool:
        return fare_earn_category in self.fare_class_earnings

    def calculate(self, segment: Segment, fare_earn_category: str) -> CalculationResult:
        earning = self.fare_class_earnings.get(fare_earn_category)
        if earning is None:
            raise ConfigurationError(
                f"Rule {self.name} has no earnings for fare earn category {fare_earn_category!r}"
            )

        return build_result(
            self,
            fare_earn_category,
            earning.calculation_notes,
            earning.qantas_points,
            earning.status_credits,
        )
