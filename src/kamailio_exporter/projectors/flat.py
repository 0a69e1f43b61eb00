"""
Flat Projectors.

Projection for methods whose response is a single level of scalar
fields:
    - FlatProjector: one unlabeled value per field
      (core.shmmem, core.uptime, core.tcp_info, tls.info)
    - CodeBucketProjector: same, but status-code-like keys such as
      "200", "6xx" or "xxx" are folded into one labeled ``codes`` metric
      (tm.stats, sl.stats)
"""

from __future__ import annotations

import re
from typing import Dict, List

from kamailio_exporter.domain.entities import MetricValue
from kamailio_exporter.domain.value_objects import DecodedField, ProjectedMetrics
from kamailio_exporter.projectors.common import numeric_fields

# Codes returned by Kamailio: "200", "6xx" or even "xxx"
CODE_PATTERN = re.compile(r"^[0-9x]{3}$")

CODES_METRIC = "codes"


class FlatProjector:
    """Every top-level numeric field maps 1:1 to a metric."""

    @property
    def name(self) -> str:
        return "flat"

    def project(self, root: DecodedField) -> ProjectedMetrics:
        return {key: [MetricValue(value=value)] for key, value in numeric_fields(root)}


class CodeBucketProjector:
    """Top-level fields, with code buckets folded into ``codes``."""

    def __init__(self, pattern: "re.Pattern[str]" = CODE_PATTERN) -> None:
        self.pattern = pattern

    @property
    def name(self) -> str:
        return "code_buckets"

    def project(self, root: DecodedField) -> ProjectedMetrics:
        metrics: Dict[str, List[MetricValue]] = {}

        for key, value in numeric_fields(root):
            if self.pattern.match(key):
                metrics.setdefault(CODES_METRIC, []).append(
                    MetricValue(value=value, labels={"code": key})
                )
            else:
                metrics[key] = [MetricValue(value=value)]

        return metrics
