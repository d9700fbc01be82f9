"""Conversion service orchestration."""

from .service import ExportReport, ImportReport, LocalizationService

__all__ = ["ExportReport", "ImportReport", "LocalizationService"]
