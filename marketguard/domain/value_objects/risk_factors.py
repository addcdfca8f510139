"""Six-factor fraud risk signals.

Every factor is a normalized risk value in [0, 1]. Calculators clamp their
output with clamp_risk() before building RiskFactors, and RiskFactors
refuses out-of-range values so the weighted composite stays within [0, 1].
"""

from dataclasses import asdict, dataclass


def clamp_risk(value: float) -> float:
    """Clamp a raw risk value into [0, 1]."""
    return min(1.0, max(0.0, value))


@dataclass(frozen=True, slots=True, kw_only=True)
class RiskFactors:
    """Individual risk factors for one order.

    Attributes:
        velocity_risk: Order frequency and spend in the trailing 24h.
        location_risk: Proxy/VPN egress and IP churn over 7 days.
        device_risk: Known vs. unrecognized device fingerprint.
        behavior_risk: Order hour and amount vs. historical profile.
        account_risk: Account age and verification state.
        payment_risk: Payment instrument novelty/channel.

    Raises:
        ValueError: If any factor is outside [0, 1].
    """

    velocity_risk: float = 0.0
    location_risk: float = 0.0
    device_risk: float = 0.0
    behavior_risk: float = 0.0
    account_risk: float = 0.0
    payment_risk: float = 0.0

    def __post_init__(self) -> None:
        for name, value in self.to_dict().items():
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

    def to_dict(self) -> dict[str, float]:
        """Serialize factors for audit records."""
        return asdict(self)
