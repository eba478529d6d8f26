"""Quality grading from visual inspection and firmness."""

from ..constants import FIRMNESS_SCORES, GRADE_A_MIN_SCORE, GRADE_B_MIN_SCORE
from ..models import Firmness, QualityGrade


def firmness_score(firmness: Firmness) -> int:
    """Points for a firmness category: High 2, Medium 1, Low 0."""
    return FIRMNESS_SCORES[Firmness(firmness).value]


def determine_grade_from_inspection(visual_quality: int, firmness: Firmness) -> QualityGrade:
    """
    Derive a quality grade from an inspection.

    The visual score (1-5) and firmness points are summed:
    - total >= 6: grade A
    - total >= 4: grade B
    - otherwise: grade C

    Args:
        visual_quality: Visual quality score from 1 (poor) to 5 (excellent)
        firmness: Firmness category

    Returns:
        Derived quality grade

    Example:
        >>> determine_grade_from_inspection(5, Firmness.HIGH)
        <QualityGrade.A: 'A'>
    """
    total_score = visual_quality + firmness_score(firmness)

    if total_score >= GRADE_A_MIN_SCORE:
        return QualityGrade.A
    if total_score >= GRADE_B_MIN_SCORE:
        return QualityGrade.B
    return QualityGrade.C
