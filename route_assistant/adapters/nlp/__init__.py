"""NLP adapters - Implementations of NLP-related ports.

Available implementations:
- RuleBasedEntityExtractor: Pattern-driven slot extraction with context merge
- RuleBasedIntentClassifier: Rule-table intent scoring
"""

from .intent_adapter import RuleBasedIntentClassifier
from .rule_based import RuleBasedEntityExtractor

__all__ = ["RuleBasedEntityExtractor", "RuleBasedIntentClassifier"]
