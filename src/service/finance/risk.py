"""
Credit Risk Assessment for the Livrili finance module.

An additive heuristic: each factor contributes a capped number of points
and the total (0-100, higher = riskier) decides the risk level.

Factor             Max points
Utilization            30
Late payment rate      25
Balance status         20
Business age           15
History length         10

The maximum reachable score is exactly 100.
"""

from typing import List, Optional, Tuple

from .credit import calculate_credit_utilization
from .models import RiskAssessment, RiskLevel, RiskProfile

FactorScore = Tuple[int, Optional[str]]

RECOMMENDATIONS = {
    RiskLevel.HIGH: "Recommend credit reduction or cash-only terms",
    RiskLevel.MEDIUM: "Monitor closely, consider credit limit review",
    RiskLevel.LOW: "Good candidate for credit extension",
}


def score_utilization(utilization: float) -> FactorScore:
    """Points for credit utilization (percent)."""
    if utilization > 90:
        return 30, "High credit utilization (>90%)"
    elif utilization > 70:
        return 20, "Moderate credit utilization (70-90%)"
    elif utilization > 50:
        return 10, "Elevated credit utilization (50-70%)"
    return 0, None


def score_late_payments(late_payment_count: int, total_payments: int) -> FactorScore:
    """
    Points for the share of payments made late.

    No payments on record means no rate and no points; the short history
    is penalized separately by score_history_length().
    """
    if total_payments <= 0:
        return 0, None

    late_payment_rate = late_payment_count / total_payments
    if late_payment_rate > 0.2:
        return 25, "Poor payment history (>20% late payments)"
    elif late_payment_rate > 0.1:
        return 15, "Concerning payment history (10-20% late payments)"
    elif late_payment_rate > 0.05:
        return 5, "Some payment delays (5-10% late payments)"
    return 0, None


def score_business_age(business_age_months: int) -> FactorScore:
    if business_age_months < 6:
        return 15, "New business (<6 months)"
    elif business_age_months < 12:
        return 10, "Young business (6-12 months)"
    elif business_age_months < 24:
        return 5, "Relatively new business (1-2 years)"
    return 0, None


def score_balance_status(current_balance: float, credit_limit: float) -> FactorScore:
    """Points for owing money, doubled when the debt is beyond the limit."""
    if current_balance < -credit_limit:
        return 20, "Over credit limit"
    elif current_balance < 0:
        return 10, "Outstanding balance"
    return 0, None


def score_history_length(payment_history_months: int) -> FactorScore:
    if payment_history_months < 3:
        return 10, "Limited payment history (<3 months)"
    elif payment_history_months < 6:
        return 5, "Short payment history (3-6 months)"
    return 0, None


def classify_risk(
    risk_score: int,
    high_threshold: int = 60,
    medium_threshold: int = 30,
) -> RiskLevel:
    if risk_score >= high_threshold:
        return RiskLevel.HIGH
    elif risk_score >= medium_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def assess_credit_risk(
    profile: RiskProfile,
    high_threshold: int = 60,
    medium_threshold: int = 30,
) -> RiskAssessment:
    """
    Assess the risk of extending credit to a retailer.

    Algorithm:
        1. Score each of the five factors and collect their descriptions
        2. Sum the points
        3. Classify: >= high_threshold high, >= medium_threshold medium,
           otherwise low
        4. Report the score capped at 100

    Args:
        profile: Retailer risk profile
        high_threshold: Score at which risk becomes high
        medium_threshold: Score at which risk becomes medium

    Returns:
        RiskAssessment with score, level, factors and recommendation
    """
    utilization = calculate_credit_utilization(profile.credit_limit, profile.current_balance)

    scored = [
        score_utilization(utilization),
        score_late_payments(profile.late_payment_count, profile.total_payments),
        score_business_age(profile.business_age_months),
        score_balance_status(profile.current_balance, profile.credit_limit),
        score_history_length(profile.payment_history_months),
    ]

    risk_score = sum(points for points, _ in scored)
    factors: List[str] = [reason for _, reason in scored if reason is not None]

    risk_level = classify_risk(risk_score, high_threshold, medium_threshold)

    return RiskAssessment(
        risk_score=min(100, risk_score),
        risk_level=risk_level,
        factors=factors,
        recommendation=RECOMMENDATIONS[risk_level],
    )


def explain_assessment(assessment: RiskAssessment) -> str:
    """
    Generate a human-readable explanation of a risk assessment.

    Used for logs and the credit team's review notes.
    """
    lines = [
        f"Risk: {assessment.risk_level.value.upper()} ({assessment.risk_score}/100)",
        f"Recommendation: {assessment.recommendation}",
        "",
    ]

    if assessment.factors:
        lines.append("Contributing Factors:")
        lines.extend(f"  - {factor}" for factor in assessment.factors)
    else:
        lines.append("No risk factors identified")

    return "\n".join(lines)
