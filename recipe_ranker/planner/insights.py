# recipe_ranker/planner/insights.py
"""
Plan-level insights: overall score, strengths and improvements.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Any

from recipe_ranker.planner.daily_planner import DailyPlan
from recipe_ranker.scorers.base_scorer import round_score


@dataclass
class PlanInsights:
    """
    Attributes:
        overall_score: Rounded mean of the macro progress percentages
        strengths: What the plan does well
        improvements: What to change
        macro_balance: "excellent" (>=90), "good" (>=75) or "needs_improvement"
    """
    overall_score: int
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    macro_balance: str = "needs_improvement"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "macro_balance": self.macro_balance,
        }


def get_daily_plan_insights(plan: DailyPlan) -> PlanInsights:
    """
    Summarize how well a plan covers its macro goals.

    Args:
        plan: Generated daily plan

    Returns:
        PlanInsights (overall score 0 when the plan has no progress data)
    """
    progress = plan.macro_progress
    if not progress:
        return PlanInsights(overall_score=0)

    overall = round_score(sum(progress.values()) / len(progress))
    if overall >= 90:
        balance = "excellent"
    elif overall >= 75:
        balance = "good"
    else:
        balance = "needs_improvement"

    strengths = []
    improvements = []

    calories = progress.get("calories", 0)
    if 90 <= calories <= 110:
        strengths.append("Perfect calorie balance")
    elif calories < 80:
        improvements.append("Consider adding more calories")
    elif calories > 120:
        improvements.append("Consider reducing calories")

    protein = progress.get("protein", 0)
    if protein >= 90:
        strengths.append("Excellent protein intake")
    elif protein < 70:
        improvements.append("Add more protein-rich foods")

    carbs = progress.get("carbs", 0)
    if 80 <= carbs <= 120:
        strengths.append("Good carbohydrate balance")
    elif carbs < 70:
        improvements.append("Consider adding healthy carbs")

    fat = progress.get("fat", 0)
    if 80 <= fat <= 120:
        strengths.append("Healthy fat intake")
    elif fat < 70:
        improvements.append("Add healthy fats")

    return PlanInsights(
        overall_score=overall,
        strengths=strengths,
        improvements=improvements,
        macro_balance=balance,
    )
