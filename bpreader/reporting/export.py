#!/usr/bin/env python3
"""
Report → JSON-ready dict.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from bpreader import ENGINE_VERSION
from bpreader.classification.bp_categories import classify
from bpreader.extraction.model import Reading, Report
from bpreader.reporting.aggregate import date_range


def reading_to_dict(reading: Reading) -> Dict[str, Any]:
    return {
        "date": reading.date.isoformat(),
        "time": reading.time,
        "systolic": reading.systolic,
        "diastolic": reading.diastolic,
        "heart_rate": reading.heart_rate,
        "reading_type": reading.reading_type.label,
        "category": classify(reading.systolic, reading.diastolic).label,
    }


def report_to_dict(report: Report) -> Dict[str, Any]:
    meta = report.metadata
    span = date_range(report.readings)
    metadata = asdict(meta)
    metadata.pop("summary_stats", None)
    return {
        "meta": {
            "engine_version": ENGINE_VERSION,
            "page_count": report.page_count,
            "reading_count": len(report.readings),
            "first_date": span[0].isoformat() if span else None,
            "last_date": span[1].isoformat() if span else None,
        },
        "metadata": metadata,
        "summary_stats": asdict(meta.summary_stats) if meta.summary_stats else None,
        "readings": [reading_to_dict(r) for r in report.readings],
        "issues": [{k: v for k, v in asdict(i).items() if v is not None} for i in report.issues],
    }


def write_report_json(report: Report, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report_to_dict(report), indent=2, default=str), encoding="utf-8")
    return path
