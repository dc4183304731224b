"""Domain services."""

from dentrecon.domain.services.change_applicator import FindingChangeApplicator, parse_changes
from dentrecon.domain.services.confidence_aggregator import ConfidenceAggregator
from dentrecon.domain.services.critique import split_critique
from dentrecon.domain.services.finding_canonicalizer import (
    FindingCanonicalizer,
    extract_finding_records,
)
from dentrecon.domain.services.finding_merger import FindingMerger, truncate_findings
from dentrecon.domain.services.overlay_geometry import OverlayGeometry
from dentrecon.domain.services.overlay_validator import OverlayValidator
from dentrecon.domain.services.template_normalizer import TemplateNormalizer
from dentrecon.domain.services.tooth_numbering import ToothNumberingConverter, resolve_tooth
from dentrecon.domain.services.version_differ import VersionDiffEngine

__all__ = [
    "ConfidenceAggregator",
    "FindingCanonicalizer",
    "FindingChangeApplicator",
    "FindingMerger",
    "OverlayGeometry",
    "OverlayValidator",
    "TemplateNormalizer",
    "ToothNumberingConverter",
    "VersionDiffEngine",
    "extract_finding_records",
    "parse_changes",
    "resolve_tooth",
    "split_critique",
    "truncate_findings",
]
