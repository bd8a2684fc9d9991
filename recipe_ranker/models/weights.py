# recipe_ranker/models/weights.py
"""
Per-user blend weights for the signal scorers.

The three internal weights (discriminatory, base_score, health_goal)
always sum to 1.0. The other four are independent bounded weights with
fixed defaults.
"""
from dataclasses import dataclass, field, asdict
from typing import Dict, Any


INTERNAL_WEIGHT_NAMES = ("discriminatory", "base_score", "health_goal")
EXTERNAL_WEIGHT_NAMES = ("behavioral", "temporal", "enhanced", "external")
SIGNAL_NAMES = INTERNAL_WEIGHT_NAMES + EXTERNAL_WEIGHT_NAMES


@dataclass(frozen=True)
class ScoringWeights:
    """
    Blend weight per signal.

    Attributes:
        discriminatory: Weight of the discriminatory (preference filter) score
        base_score: Weight of the composite macro/taste score
        health_goal: Weight of the health goal score
        behavioral / temporal / enhanced / external: Additive signal weights
    """
    discriminatory: float = 0.60
    base_score: float = 0.25
    health_goal: float = 0.15
    behavioral: float = 0.15
    temporal: float = 0.10
    enhanced: float = 0.10
    external: float = 0.05

    @property
    def internal_sum(self) -> float:
        return self.discriminatory + self.base_score + self.health_goal

    def get(self, signal: str) -> float:
        """Weight for a signal name (see SIGNAL_NAMES)."""
        if signal not in SIGNAL_NAMES:
            raise KeyError(f"Unknown signal: {signal}")
        return getattr(self, signal)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScoringWeights':
        """Missing keys fall back to defaults."""
        defaults = cls()
        return cls(**{name: float(data.get(name, getattr(defaults, name)))
                      for name in SIGNAL_NAMES})


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class WeightAdjustmentResult:
    """
    Output of the weight-learning step.

    Attributes:
        weights: Final weights (defaults blended toward learned by confidence)
        learned_weights: Unblended weights derived from correlations
        confidence: 0-1 confidence in learned weights
        sample_size: Unique positive + negative recipe ids used
        correlations: signal name -> correlation in [-1, 1]
    """
    weights: ScoringWeights
    learned_weights: ScoringWeights
    confidence: float
    sample_size: int
    correlations: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weights": self.weights.to_dict(),
            "learned_weights": self.learned_weights.to_dict(),
            "confidence": self.confidence,
            "sample_size": self.sample_size,
            "correlations": dict(self.correlations),
        }
