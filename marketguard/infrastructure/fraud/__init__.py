"""Fraud detection infrastructure.

Components:
    - RiskScorer: six factor calculators over the history provider
    - RuleEngine: weighted composite, rule overlays and verdict
    - FraudDetector: detect_order_fraud() = scorer + engine + audit record
"""

from marketguard.infrastructure.fraud.fraud_detector import FraudDetector
from marketguard.infrastructure.fraud.risk_scorer import RiskScorer
from marketguard.infrastructure.fraud.rule_engine import FACTOR_WEIGHTS, RuleEngine

__all__ = ["FACTOR_WEIGHTS", "FraudDetector", "RiskScorer", "RuleEngine"]
