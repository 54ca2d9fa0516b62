"""Result export.

Renders a completed calculation, with the patient data, answers and
session metadata, as JSON or plain text.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from clinicalscore.core.audit import ActivityAction, log_activity
from clinicalscore.schemas.base import ExportFormat
from clinicalscore.services.catalog import CalculatorConfig
from clinicalscore.services.scoring import CalculationResult, PatientData

logger = logging.getLogger(__name__)


@dataclass
class ExportData:
    """Everything that goes into an export."""

    config: CalculatorConfig
    patient: PatientData
    answers: dict[str, float | None]
    result: CalculationResult
    session_id: str
    duration: float
    export_time: str = field(default_factory=lambda: datetime.now(UTC).isoformat())


@dataclass
class ExportedResult:
    """A rendered export."""

    format: ExportFormat
    content: str
    content_type: str
    filename: str


class ExportService:
    """Service rendering calculation results for download."""

    def export(self, data: ExportData, format: ExportFormat | str = ExportFormat.JSON) -> ExportedResult:
        """Render the export in the requested format.

        Raises:
            ValueError: For unsupported formats.
        """
        format = ExportFormat(format)
        if format == ExportFormat.JSON:
            content, content_type = self._generate_json(data), "application/json"
        elif format == ExportFormat.TEXT:
            content, content_type = self._generate_text(data), "text/plain"
        else:
            raise ValueError(f"Unsupported format: {format}")

        log_activity(
            ActivityAction.EXPORT,
            calculator_type=data.config.type.value,
            session_id=data.session_id,
            details={"format": format.value},
        )

        return ExportedResult(
            format=format,
            content=content,
            content_type=content_type,
            filename=f"{data.config.type.value}-{data.session_id}.{'json' if format == ExportFormat.JSON else 'txt'}",
        )

    def _generate_json(self, data: ExportData) -> str:
        export_dict: dict[str, Any] = {
            "calculator": {
                "type": data.config.type.value,
                "name": data.config.name,
                "version": data.config.version,
            },
            "patient": data.patient.to_dict(),
            "answers": data.answers,
            "result": data.result.to_dict(),
            "metadata": {
                "session_id": data.session_id,
                "duration": data.duration,
                "export_time": data.export_time,
            },
        }
        return json.dumps(export_dict, indent=2, default=str)

    def _generate_text(self, data: ExportData) -> str:
        lines = [f"{data.config.name} - Result", "", "Patient information:"]
        for key, value in data.patient.to_dict().items():
            lines.append(f"  {key}: {value}")

        lines.extend([
            "",
            "Result:",
            f"  Score: {data.result.score}",
            f"  Risk level: {data.result.risk_level.value}",
            f"  Interpretation: {data.result.interpretation}",
            "",
            "Recommendations:",
        ])
        lines.extend(f"  - {rec}" for rec in data.result.recommendations)

        lines.extend([
            "",
            "Metadata:",
            f"  Session ID: {data.session_id}",
            f"  Duration: {data.duration:.0f} seconds",
            f"  Exported: {data.export_time}",
        ])
        return "\n".join(lines)
