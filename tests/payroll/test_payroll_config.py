from decimal import Decimal

import pytest

from src.athlete_analytics.athlete_analytics.core.enums import DeductionType, PayPeriod
from src.athlete_analytics.athlete_analytics.core.exceptions import ValidationError
from src.athlete_analytics.athlete_analytics.payroll.model import DeductionRule, PayrollConfig


def test_deduction_from_dict_assigns_position_id():
    ded = DeductionRule.from_dict({"name": " Tax ", "type": "percent", "value": "7.5"}, position=2)

    assert ded.name == "Tax"
    assert ded.type == DeductionType.PERCENT
    assert ded.value == Decimal("7.5")
    assert ded.rule_id == "ded_2"


@pytest.mark.parametrize(
    "data",
    [
        {"name": "", "type": "FLAT", "value": 1},
        {"name": "Fee", "type": "BONUS", "value": 1},
        {"name": "Fee", "type": "FLAT", "value": -1},
        {"name": "Fee", "type": "FLAT", "value": "abc"},
    ],
)
def test_invalid_deductions_rejected(data):
    with pytest.raises(ValidationError):
        DeductionRule.from_dict(data)


def test_partial_update_keeps_other_fields():
    config = PayrollConfig().updated(pay_period="monthly", deductions=[{"name": "Fee", "type": "FLAT", "value": 5}])
    changed = config.updated(default_hourly_rate=18)

    assert changed.pay_period == PayPeriod.MONTHLY
    assert changed.default_hourly_rate == Decimal("18")
    assert [d.name for d in changed.deductions] == ["Fee"]
    assert config.default_hourly_rate is None


def test_deductions_keep_configured_order():
    config = PayrollConfig().updated(
        deductions=[
            {"id": "b", "name": "Second", "type": "FLAT", "value": 1},
            {"id": "a", "name": "First", "type": "PERCENT", "value": 2},
        ]
    )
    assert [d.rule_id for d in config.deductions] == ["b", "a"]


def test_unknown_pay_period_rejected():
    with pytest.raises(ValidationError):
        PayrollConfig().updated(pay_period="FORTNIGHTLY")
