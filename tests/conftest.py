# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from src.logging.init import reset_logging
from src.models.manifest_record import ManifestRecord, format_line_number
from src.services.normalizer import TrackingReferenceGenerator

FIXED_TRACKING_NUMBER = 1234567890123
FIXED_TRACKING_REF = "%0SL30HE1550" + str(FIXED_TRACKING_NUMBER)


class FixedRandom:
    """randint() stand-in that always returns the same number."""

    def __init__(self, value: int = FIXED_TRACKING_NUMBER) -> None:
        self.value = value
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.value


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("MANIFEST_CONFIG", raising=False)
        monkeypatch.delenv("MANIFEST_OUTPUT_DIR", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """tracking_prefix: "%0SL30HE9999"
defaults:
  date: "01012025"
  courier: DPD
  status: "1"
  quantity: "1"
filename_template: "T1.M{reference}.PBS"
output_directory: ./out
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "manifest.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def fixed_random() -> FixedRandom:
    return FixedRandom()


@pytest.fixture()
def fixed_tracking(fixed_random: FixedRandom) -> TrackingReferenceGenerator:
    return TrackingReferenceGenerator(rng=fixed_random)


@pytest.fixture()
def make_excel(temp_workdir: Path):
    """Write ``rows`` (header first) into data/<name> and return the path."""

    def _make(name: str, rows: list[list[object]], sheet: str = "Sheet1", extra_sheets: dict | None = None) -> Path:
        p = temp_workdir / "data" / name
        with pd.ExcelWriter(p) as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
            for sname, srows in (extra_sheets or {}).items():
                pd.DataFrame(srows).to_excel(writer, sheet_name=sname, header=False, index=False)
        return p

    return _make


def make_records(n: int, reference: str = "R1", tracking_ref: str = FIXED_TRACKING_REF) -> list[ManifestRecord]:
    return [
        ManifestRecord(
            reference=reference,
            line_number=format_line_number(i),
            isbn=f"97800000000{i:02d}",
            date="26112024",
            courier="DPD",
            quantity=str(i + 1),
            status="1",
            tracking_ref=tracking_ref,
        )
        for i in range(n)
    ]
