"""Boundary normalization of loosely-typed company rows."""

import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from leadscore.models import CompanyRecord
from leadscore.score.scorer import round_half_up

logger = logging.getLogger(__name__)

# Flat contact columns folded into a single contact person
CONTACT_COLUMNS = {
    "name": ("contactName", "contact_name"),
    "phone": ("contactPhone", "contact_phone"),
    "email": ("contactEmail", "contact_email"),
}


def calculate_data_completeness(record: CompanyRecord) -> int:
    """Percentage of data-quality fields that are filled in."""
    fields = [
        record.company_name_en,
        record.registered_no,
        record.industrial_name,
        record.province,
        record.company_size,
        record.verification_status,
        any(c.phone for c in record.contact_persons),
        any(c.email for c in record.contact_persons),
    ]
    filled = sum(1 for f in fields if f)
    return round_half_up(filled / len(fields) * 100)


class RecordNormalizer:
    """Validate raw rows into ``CompanyRecord`` instances."""

    def normalize(self, raw: Mapping[str, Any]) -> CompanyRecord:
        """Clean and validate one raw row.

        Raises:
            ValidationError: if the row cannot form a valid record
        """
        data = self._clean(raw)
        self._fold_contact(data)

        # Identifiers sometimes arrive as numbers from JSON or spreadsheets
        if "id" in data and not isinstance(data["id"], str):
            data["id"] = str(data["id"])

        record = CompanyRecord.model_validate(data)
        return self.ensure_completeness(record)

    def normalize_many(self, rows: Iterable[Mapping[str, Any]]) -> list[CompanyRecord]:
        """Normalize rows, skipping any that fail validation."""
        records = []
        for i, row in enumerate(rows, 1):
            try:
                records.append(self.normalize(row))
            except ValidationError as e:
                logger.warning(f"Skipping row {i}: {e.error_count()} validation error(s)")
        return records

    @staticmethod
    def ensure_completeness(record: CompanyRecord) -> CompanyRecord:
        """Fill in data completeness when the source did not provide it."""
        if record.data_completeness is not None:
            return record
        return record.model_copy(
            update={"data_completeness": calculate_data_completeness(record)}
        )

    @staticmethod
    def _clean(raw: Mapping[str, Any]) -> dict[str, Any]:
        """Strip strings and drop blank values."""
        data = {}
        for key, value in raw.items():
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            if value is None:
                continue
            data[key] = value
        return data

    @staticmethod
    def _fold_contact(data: dict[str, Any]):
        """Turn flat contact columns into a contact person entry."""
        contact = {}
        for field, columns in CONTACT_COLUMNS.items():
            for column in columns:
                if column in data:
                    contact[field] = data.pop(column)

        if contact and "contactPersons" not in data and "contact_persons" not in data:
            contact.setdefault("name", "")
            data["contactPersons"] = [contact]
